from typing import Any, Dict, Tuple

from retriever.core.chains import ChainDescriptor
from retriever.providers.base import StandardJsonProvider
from retriever.utils.source_decoding import decode_single_brace_stripped

API_ENDPOINT = "https://api.routescan.io/v2/network/mainnet/evm/{chain_id}/etherscan/api"

class RoutescanProvider(StandardJsonProvider):
    """
    Routescan's Etherscan-compatible API (Boba networks).
    One extra outer brace pair is stripped before parsing.
    """

    decode_source = staticmethod(decode_single_brace_stripped)

    @property
    def name(self) -> str:
        return "routescan"

    def build_request(self, address: str, chain: ChainDescriptor) -> Tuple[str, Dict[str, Any]]:
        return API_ENDPOINT.format(chain_id=chain.chain_id), {
            'module': 'contract',
            'action': 'getsourcecode',
            'address': address,
        }
