from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

import requests

from retriever.core.chains import ChainDescriptor
from retriever.core.errors import DecodeError, ProviderStatusError, TransportError
from retriever.core.job import SourceFile
from retriever.utils.logger import setup_logger
from retriever.utils.source_decoding import normalize_sources, sources_of


class BaseProvider(ABC):
    """Explorer adapter: one HTTP GET, then explorer-specific decoding"""

    # HTTP codes the explorer uses to say "no such verified contract"
    NOT_FOUND_STATUS_CODES: Tuple[int, ...] = ()

    def __init__(self, api_key: Optional[str] = None, timeout: float = 30):
        self.api_key = api_key
        self.timeout = timeout
        self.logger = setup_logger('retriever.providers')

    @property
    @abstractmethod
    def name(self) -> str:
        """Explorer name"""
        pass

    @abstractmethod
    def build_request(self, address: str, chain: ChainDescriptor) -> Tuple[str, Dict[str, Any]]:
        """Return (url, query params) for a getsourcecode request"""
        pass

    @abstractmethod
    def parse(self, response: Any, chain: ChainDescriptor, address: str) -> List[SourceFile]:
        """
        Decode a raw explorer response into source files.
        Raises ProviderStatusError when the explorer reports failure,
        DecodeError when the payload cannot be parsed.
        """
        pass

    def raw_fetch(self, address: str, chain: ChainDescriptor) -> Any:
        """Single GET, no retries. Returns the decoded JSON body."""
        url, params = self.build_request(address, chain)
        context = {'chain': chain.symbol, 'address': address, 'provider': self.name}
        self.logger.debug(f"GET {url} ({self.name})")

        try:
            response = requests.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise TransportError("request timeout", url=url, original_error=e, **context)
        except requests.exceptions.RequestException as e:
            raise TransportError("network error", url=url, original_error=e, **context)

        if response.status_code in self.NOT_FOUND_STATUS_CODES:
            raise ProviderStatusError(f"{self.name} returned HTTP {response.status_code}", **context)
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise TransportError(f"HTTP {response.status_code}", status_code=response.status_code,
                                 url=url, original_error=e, **context)

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError("response is not valid JSON", stage='envelope',
                              original_error=e, **context)

    def fetch(self, address: str, chain: ChainDescriptor) -> List[SourceFile]:
        response = self.raw_fetch(address, chain)
        try:
            return self.parse(response, chain, address)
        except (DecodeError, ProviderStatusError) as e:
            e.chain = e.chain or chain.symbol
            e.address = e.address or address
            e.provider = e.provider or self.name
            raise

    def __repr__(self):
        return f"{self.__class__.__name__}(name={self.name})"


class EtherscanStyleProvider(BaseProvider):
    """
    Explorers speaking the Etherscan getsourcecode dialect:
    {"status": "1", "message": "OK", "result": [{"SourceCode": ..., "ContractName": ...}]}
    """

    SUCCESS_STATUS: Any = '1'

    def check_status(self, response: Any, address: str):
        if not isinstance(response, dict) or response.get('status') != self.SUCCESS_STATUS:
            message = response.get('message', 'unknown error') if isinstance(response, dict) else 'unknown error'
            raise ProviderStatusError(f"{self.name} status error: {message}", address=address)

    def parse(self, response: Any, chain: ChainDescriptor, address: str) -> List[SourceFile]:
        self.check_status(response, address)
        result = response.get('result')
        if not isinstance(result, list):
            raise DecodeError("Result is not an array", stage='envelope')

        files = []
        for entry in result:
            if not isinstance(entry, dict):
                raise DecodeError("Result entry is not an object", stage='envelope')
            files.extend(self.decode_entry(entry, chain.symbol, address))
        return files

    @abstractmethod
    def decode_entry(self, entry: Dict[str, Any], chain: str, address: str) -> List[SourceFile]:
        """Decode one result[] entry"""
        pass


class StandardJsonProvider(EtherscanStyleProvider):
    """
    Etherscan-dialect explorers that always return standard-json input in
    SourceCode. Subclasses choose how the JSON is unwrapped.
    """

    @staticmethod
    @abstractmethod
    def decode_source(source_code: str) -> Any:
        """Unwrap SourceCode into the standard-json document"""
        pass

    def decode_entry(self, entry: Dict[str, Any], chain: str, address: str) -> List[SourceFile]:
        source_code = entry.get('SourceCode')
        if not isinstance(source_code, str) or not source_code.strip():
            self.logger.info(f"Empty SourceCode for {address} on {chain}, skipping entry")
            return []
        document = self.decode_source(source_code)
        sources = sources_of(document)
        if not sources:
            self.logger.warning(f"No sources in {self.name} payload for {address}")
        return normalize_sources(sources, chain, address)
