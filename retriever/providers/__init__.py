from enum import Enum
from typing import Callable, Dict, Mapping, Optional

from retriever.providers.base import BaseProvider
from retriever.providers.blockscout import BlockscoutProvider
from retriever.providers.btrscan import BtrscanProvider
from retriever.providers.etherscan import EtherscanV2Provider
from retriever.providers.merlinscan import MerlinscanProvider
from retriever.providers.routescan import RoutescanProvider
from retriever.providers.scrollscan import ScrollscanProvider

class ProviderKind(Enum):
    """Every adapter variant the dispatcher can select"""
    GENERIC = "etherscan"
    SCROLLSCAN = "scrollscan"
    MERLINSCAN = "merlinscan"
    BTRSCAN = "btrscan"
    ROUTESCAN = "routescan"
    BLOCKSCOUT = "blockscout"

# chain id -> bespoke explorer; anything else falls through to DEFAULT_KIND
PROVIDER_ROUTES: Mapping[int, ProviderKind] = {
    534352: ProviderKind.SCROLLSCAN,    # scroll
    4200: ProviderKind.MERLINSCAN,      # merlin
    200901: ProviderKind.BTRSCAN,       # bitlayer
    288: ProviderKind.ROUTESCAN,        # boba-ethereum
    56288: ProviderKind.ROUTESCAN,      # boba-bnb
    43288: ProviderKind.ROUTESCAN,      # boba-avax
    34443: ProviderKind.BLOCKSCOUT,     # mode
    7777777: ProviderKind.BLOCKSCOUT,   # zora
}

DEFAULT_KIND = ProviderKind.GENERIC

BLOCKSCOUT_URLS: Mapping[int, str] = {
    34443: "https://explorer.mode.network",
    7777777: "https://explorer.zora.energy",
}

# Registry of adapter factories: (chain_id, api_key, timeout) -> provider
PROVIDERS: Dict[ProviderKind, Callable[..., BaseProvider]] = {
    ProviderKind.GENERIC: lambda chain_id, api_key, timeout: EtherscanV2Provider(api_key, timeout),
    ProviderKind.SCROLLSCAN: lambda chain_id, api_key, timeout: ScrollscanProvider(api_key, timeout),
    ProviderKind.MERLINSCAN: lambda chain_id, api_key, timeout: MerlinscanProvider(api_key, timeout),
    ProviderKind.BTRSCAN: lambda chain_id, api_key, timeout: BtrscanProvider(api_key, timeout),
    ProviderKind.ROUTESCAN: lambda chain_id, api_key, timeout: RoutescanProvider(api_key, timeout),
    ProviderKind.BLOCKSCOUT: lambda chain_id, api_key, timeout: BlockscoutProvider(
        BLOCKSCOUT_URLS[chain_id], api_key, timeout),
}

def select_kind(chain_id: int) -> ProviderKind:
    """Bespoke explorer for the chain, or the generic etherscan v2 adapter"""
    return PROVIDER_ROUTES.get(chain_id, DEFAULT_KIND)

def get_provider(chain_id: int, api_keys: Optional[Mapping[str, Optional[str]]] = None,
                 timeout: float = 30) -> BaseProvider:
    """Get provider instance for a chain"""
    kind = select_kind(chain_id)
    api_key = (api_keys or {}).get(kind.value)
    return PROVIDERS[kind](chain_id, api_key, timeout)
