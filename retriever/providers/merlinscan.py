from typing import Any, Dict, Tuple

from retriever.core.chains import ChainDescriptor
from retriever.providers.base import StandardJsonProvider
from retriever.utils.source_decoding import decode_pre_unwrapped

API_ENDPOINT = "https://scan.merlinchain.io/api/"

class MerlinscanProvider(StandardJsonProvider):
    """Merlin chain explorer: SourceCode is a bare standard-json object"""

    decode_source = staticmethod(decode_pre_unwrapped)

    @property
    def name(self) -> str:
        return "merlinscan"

    def build_request(self, address: str, chain: ChainDescriptor) -> Tuple[str, Dict[str, Any]]:
        # merlin spells the key parameter api_key
        return API_ENDPOINT, {
            'module': 'contract',
            'action': 'getsourcecode',
            'address': address,
            'api_key': self.api_key or '',
        }
