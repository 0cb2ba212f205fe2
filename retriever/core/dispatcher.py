from typing import Callable, List, Mapping, Optional

from retriever.core.chains import ChainDescriptor, ChainRegistry
from retriever.core.errors import ProviderStatusError
from retriever.core.job import SourceFile
from retriever.providers import BaseProvider, get_provider
from retriever.utils.logger import setup_logger
from retriever.utils.source_decoding import address_segment

class Dispatcher:
    """Routes (address, chain) to the chain's explorer adapter"""
    
    def __init__(self, registry: ChainRegistry,
                 api_keys: Optional[Mapping[str, Optional[str]]] = None,
                 timeout: float = 30,
                 provider_factory: Callable[..., BaseProvider] = get_provider):
        self.registry = registry
        self.api_keys = dict(api_keys or {})
        self.timeout = timeout
        self.provider_factory = provider_factory
        self.logger = setup_logger('retriever.dispatcher')
    
    def provider_for(self, chain: ChainDescriptor) -> BaseProvider:
        return self.provider_factory(chain.chain_id, self.api_keys, self.timeout)
    
    def fetch(self, address: str, chain_symbol: str) -> List[SourceFile]:
        """
        Fetch and normalize verified sources for one contract.
        
        UnknownChain (or ValueError for an address that is not a single path
        segment) is raised before any adapter is built. Explorer status
        failures are logged and yield an empty list; transport and decode
        errors propagate.
        """
        chain = self.registry.get(chain_symbol)
        address_segment(address)
        provider = self.provider_for(chain)
        self.logger.info(f"Fetching {address} on {chain.symbol} ({chain.chain_id}) via {provider.name}")
        
        try:
            files = provider.fetch(address, chain)
        except ProviderStatusError as e:
            self.logger.warning(f"{provider.name} scan status error {address}: {e.message}")
            return []
        
        partial = sum(1 for f in files if f.is_partial)
        if partial:
            self.logger.warning(f"{partial}/{len(files)} files for {address} contain placeholder text")
        return files
