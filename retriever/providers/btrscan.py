from typing import Any, Dict, List, Tuple

from retriever.core.chains import ChainDescriptor
from retriever.core.job import SourceFile
from retriever.providers.base import EtherscanStyleProvider
from retriever.utils.source_decoding import normalize_mixed_entry

API_ENDPOINT = "https://api.btrscan.com/scan/api"

class BtrscanProvider(EtherscanStyleProvider):
    """Bitlayer explorer. Etherscan dialect, but status is the number 1."""

    SUCCESS_STATUS = 1

    @property
    def name(self) -> str:
        return "btrscan"

    def build_request(self, address: str, chain: ChainDescriptor) -> Tuple[str, Dict[str, Any]]:
        return API_ENDPOINT, {
            'module': 'contract',
            'action': 'getsourcecode',
            'address': address,
        }

    def decode_entry(self, entry: Dict[str, Any], chain: str, address: str) -> List[SourceFile]:
        return normalize_mixed_entry(entry, chain, address)
