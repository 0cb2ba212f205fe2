from typing import Any, Dict, List, Tuple

from retriever.core.chains import ChainDescriptor
from retriever.core.errors import DecodeError, ProviderStatusError
from retriever.core.job import SourceFile
from retriever.providers.base import BaseProvider
from retriever.utils.source_decoding import (
    NO_ADDITIONAL_CODE,
    NO_ADDITIONAL_PATH,
    NO_MAIN_FILE_PATH,
    make_source_file,
)

class BlockscoutProvider(BaseProvider):
    """
    Blockscout v2 smart-contract endpoint (Mode, Zora explorers).

    The envelope carries the main file directly:
        {"source_code": ..., "file_path": ..., "additional_sources": [{"source_code", "file_path"}]}
    No status flag; an unverified contract has no source_code (or a 404).
    """

    NOT_FOUND_STATUS_CODES = (404,)

    def __init__(self, base_url: str, api_key=None, timeout: float = 30):
        super().__init__(api_key=api_key, timeout=timeout)
        self.base_url = base_url.rstrip('/')

    @property
    def name(self) -> str:
        return "blockscout"

    def build_request(self, address: str, chain: ChainDescriptor) -> Tuple[str, Dict[str, Any]]:
        return f"{self.base_url}/api/v2/smart-contracts/{address}", {}

    def parse(self, response: Any, chain: ChainDescriptor, address: str) -> List[SourceFile]:
        if not isinstance(response, dict):
            raise DecodeError("Response is not an object", stage='envelope')

        main_source = response.get('source_code')
        if not isinstance(main_source, str):
            raise ProviderStatusError("source code is missing, contract not verified", address=address)

        files = []
        main_path = response.get('file_path')
        if isinstance(main_path, str) and main_path:
            files.append(make_source_file(chain.symbol, address, main_path, main_source))
        else:
            files.append(make_source_file(chain.symbol, address, NO_MAIN_FILE_PATH,
                                          main_source, ('file_path',)))

        additional_sources = response.get('additional_sources')
        if not isinstance(additional_sources, list):
            return files

        for source in additional_sources:
            source = source if isinstance(source, dict) else {}
            placeholders = []
            code = source.get('source_code')
            if not isinstance(code, str):
                code = NO_ADDITIONAL_CODE
                placeholders.append('additional_sources.source_code')
            path = source.get('file_path')
            if not isinstance(path, str) or not path:
                path = NO_ADDITIONAL_PATH
                placeholders.append('additional_sources.file_path')
            files.append(make_source_file(chain.symbol, address, path, code, tuple(placeholders)))

        return files
