from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from retriever.core.errors import UnknownChain

@dataclass(frozen=True)
class ChainDescriptor:
    """Symbolic chain name and its numeric chain id"""
    symbol: str
    chain_id: int

# symbol -> chain id, fixed at build time
SUPPORTED_CHAINS = (
    ChainDescriptor('eth', 1),
    ChainDescriptor('bsc', 56),
    ChainDescriptor('ftm', 250),
    ChainDescriptor('mumbai', 80001),
    ChainDescriptor('pg', 137),
    ChainDescriptor('avax', 43114),
    ChainDescriptor('rinkeby', 4),
    ChainDescriptor('goerli', 5),
    ChainDescriptor('arb', 42161),
    ChainDescriptor('op', 10),
    ChainDescriptor('sepolia', 11155111),
    ChainDescriptor('base', 8453),
    ChainDescriptor('boba-ethereum', 288),
    ChainDescriptor('boba-bnb', 56288),
    ChainDescriptor('boba-avax', 43288),
    ChainDescriptor('moonbeam', 1284),
    ChainDescriptor('moonriver', 1285),
    ChainDescriptor('cro', 25),
    ChainDescriptor('rsk', 30),
    ChainDescriptor('zora', 7777777),
    ChainDescriptor('merlin', 4200),
    ChainDescriptor('pg-amoy', 80002),
    ChainDescriptor('bitlayer', 200901),
    ChainDescriptor('mode', 34443),
    ChainDescriptor('scroll', 534352),
)

class ChainRegistry:
    """Read-only chain table, built once and handed to the dispatcher"""
    
    def __init__(self, chains: Iterable[ChainDescriptor] = SUPPORTED_CHAINS):
        by_symbol = {}
        seen_ids = set()
        for chain in chains:
            if chain.symbol in by_symbol:
                raise ValueError(f"Duplicate chain symbol: {chain.symbol}")
            if chain.chain_id in seen_ids:
                raise ValueError(f"Duplicate chain id: {chain.chain_id}")
            by_symbol[chain.symbol] = chain
            seen_ids.add(chain.chain_id)
        self._by_symbol: Mapping[str, ChainDescriptor] = MappingProxyType(by_symbol)
    
    def resolve(self, symbol: str) -> int:
        """Numeric chain id for a symbol, UnknownChain if absent"""
        return self.get(symbol).chain_id
    
    def get(self, symbol: str) -> ChainDescriptor:
        chain = self._by_symbol.get(symbol)
        if chain is None:
            raise UnknownChain(f"Invalid chain: {symbol!r}", chain=symbol)
        return chain
    
    
    def items(self) -> Iterator[ChainDescriptor]:
        """Entries sorted by symbol"""
        return iter(sorted(self._by_symbol.values(), key=lambda c: c.symbol))
    
    def __contains__(self, symbol: object) -> bool:
        return symbol in self._by_symbol
    
    def __len__(self) -> int:
        return len(self._by_symbol)
    
    def __repr__(self):
        return f"ChainRegistry(chains={len(self)})"
