#!/usr/bin/env python3
"""
etherscan api v2 provider, the fallback for every chain without a bespoke explorer
one endpoint serves 60+ chains, the chainid parameter selects the chain
"""

from typing import Any, Dict, List, Tuple

from retriever.core.chains import ChainDescriptor
from retriever.core.job import SourceFile
from retriever.providers.base import EtherscanStyleProvider
from retriever.utils.source_decoding import normalize_mixed_entry

# unified v2 api endpoint (works for all 60+ chains)
API_ENDPOINT = "https://api.etherscan.io/v2/api"

class EtherscanV2Provider(EtherscanStyleProvider):
    """
    client for the etherscan unified v2 api
    
    SourceCode comes back as flat solidity for single-file contracts and as
    brace-doubled standard-json for multi-file ones; empty means unverified
    """

    @property
    def name(self) -> str:
        return "etherscan"

    def build_request(self, address: str, chain: ChainDescriptor) -> Tuple[str, Dict[str, Any]]:
        # unified v2 api: single endpoint, chainid parameter selects chain
        return API_ENDPOINT, {
            'chainid': str(chain.chain_id),
            'module': 'contract',
            'action': 'getsourcecode',
            'address': address,
            'apikey': self.api_key or '',
        }

    def decode_entry(self, entry: Dict[str, Any], chain: str, address: str) -> List[SourceFile]:
        return normalize_mixed_entry(entry, chain, address)
