from typing import Any, Dict, Tuple

from retriever.core.chains import ChainDescriptor
from retriever.providers.base import StandardJsonProvider
from retriever.utils.source_decoding import decode_brace_doubled

API_ENDPOINT = "https://api.scrollscan.com/api"

class ScrollscanProvider(StandardJsonProvider):
    """Scrollscan: SourceCode is standard-json wrapped in doubled braces"""

    decode_source = staticmethod(decode_brace_doubled)

    @property
    def name(self) -> str:
        return "scrollscan"

    def build_request(self, address: str, chain: ChainDescriptor) -> Tuple[str, Dict[str, Any]]:
        return API_ENDPOINT, {
            'module': 'contract',
            'action': 'getsourcecode',
            'address': address,
            'apikey': self.api_key or '',
        }
