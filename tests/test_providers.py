"""
Provider adapter tests.

Envelopes are literal fixtures shaped like each explorer's getsourcecode
response. The HTTP boundary is patched, nothing touches the network.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from retriever.core.chains import ChainRegistry
from retriever.core.errors import DecodeError, ProviderStatusError, TransportError
from retriever.providers.blockscout import BlockscoutProvider
from retriever.providers.btrscan import BtrscanProvider
from retriever.providers.etherscan import API_ENDPOINT, EtherscanV2Provider
from retriever.providers.merlinscan import MerlinscanProvider
from retriever.providers.routescan import RoutescanProvider
from retriever.providers.scrollscan import ScrollscanProvider
from retriever.utils.source_decoding import NO_ADDITIONAL_PATH, NO_MAIN_FILE_PATH

ADDRESS = '0xf650C3d88D12dB855b8bf7D11Be6C55A4e07dCC9'
REGISTRY = ChainRegistry()
DOUBLED = '{{"sources":{"A.sol":{"content":"X"}}}}'
SINGLE = '{"sources":{"A.sol":{"content":"X"}}}'


def envelope(*entries, status='1', message='OK'):
    return {'status': status, 'message': message, 'result': list(entries)}


def mock_response(payload=None, status_code=200, json_error=None):
    response = MagicMock()
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status_code} Error")
    if json_error:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


class TestEtherscanV2Provider:
    
    def test_build_request_uses_chain_id(self):
        provider = EtherscanV2Provider(api_key='key')
        
        url, params = provider.build_request(ADDRESS, REGISTRY.get('arb'))
        
        assert url == API_ENDPOINT
        assert params['chainid'] == '42161'
        assert params['address'] == ADDRESS
        assert params['apikey'] == 'key'
        assert params['action'] == 'getsourcecode'
    
    def test_flat_source(self):
        provider = EtherscanV2Provider()
        response = envelope({'SourceCode': 'contract Foo {}', 'ContractName': 'Foo'})
        
        files = provider.parse(response, REGISTRY.get('eth'), ADDRESS)
        
        assert [(f.path, f.content) for f in files] == [(f'{ADDRESS}/Foo.sol', 'contract Foo {}')]
    
    def test_empty_entry_skipped_siblings_kept(self):
        provider = EtherscanV2Provider()
        response = envelope(
            {'SourceCode': '', 'ContractName': ''},
            {'SourceCode': DOUBLED, 'ContractName': 'A'},
        )
        
        files = provider.parse(response, REGISTRY.get('eth'), ADDRESS)
        
        assert [f.path for f in files] == [f'{ADDRESS}/A.sol']
    
    def test_status_error(self):
        provider = EtherscanV2Provider()
        
        with pytest.raises(ProviderStatusError):
            provider.parse(envelope(status='0', message='NOTOK'), REGISTRY.get('eth'), ADDRESS)
    
    def test_result_not_array(self):
        provider = EtherscanV2Provider()
        response = {'status': '1', 'message': 'OK', 'result': 'Invalid'}
        
        with pytest.raises(DecodeError):
            provider.parse(response, REGISTRY.get('eth'), ADDRESS)


class TestStandardJsonProviders:
    
    def test_scrollscan_doubled(self):
        files = ScrollscanProvider().parse(
            envelope({'SourceCode': DOUBLED}), REGISTRY.get('scroll'), ADDRESS)
        
        assert [(f.chain, f.path, f.content) for f in files] == [('scroll', f'{ADDRESS}/A.sol', 'X')]
    
    def test_merlinscan_pre_unwrapped(self):
        files = MerlinscanProvider().parse(
            envelope({'SourceCode': SINGLE}), REGISTRY.get('merlin'), ADDRESS)
        
        assert [(f.path, f.content) for f in files] == [(f'{ADDRESS}/A.sol', 'X')]
    
    def test_merlinscan_key_parameter(self):
        _, params = MerlinscanProvider(api_key='k').build_request(ADDRESS, REGISTRY.get('merlin'))
        
        assert params['api_key'] == 'k'
        assert 'apikey' not in params
    
    def test_routescan_single_brace(self):
        files = RoutescanProvider().parse(
            envelope({'SourceCode': DOUBLED}), REGISTRY.get('boba-ethereum'), ADDRESS)
        
        assert [(f.path, f.content) for f in files] == [(f'{ADDRESS}/A.sol', 'X')]
    
    def test_routescan_url_has_chain_id(self):
        url, _ = RoutescanProvider().build_request(ADDRESS, REGISTRY.get('boba-bnb'))
        
        assert '/evm/56288/' in url
    
    def test_invalid_json_in_source_code(self):
        with pytest.raises(DecodeError) as exc:
            ScrollscanProvider().parse(
                envelope({'SourceCode': '{{oops'}), REGISTRY.get('scroll'), ADDRESS)
        assert exc.value.stage == 'brace_doubled'
    
    def test_empty_source_code_skipped(self):
        files = ScrollscanProvider().parse(
            envelope({'SourceCode': ''}), REGISTRY.get('scroll'), ADDRESS)
        
        assert files == []
    
    def test_status_string_required(self):
        with pytest.raises(ProviderStatusError):
            ScrollscanProvider().parse(
                envelope({'SourceCode': DOUBLED}, status=1), REGISTRY.get('scroll'), ADDRESS)


class TestBtrscanProvider:
    
    def test_numeric_status(self):
        response = envelope({'SourceCode': SINGLE, 'ContractName': 'A'}, status=1)
        
        files = BtrscanProvider().parse(response, REGISTRY.get('bitlayer'), ADDRESS)
        
        assert [(f.path, f.content) for f in files] == [(f'{ADDRESS}/A.sol', 'X')]
    
    def test_string_status_is_failure(self):
        with pytest.raises(ProviderStatusError):
            BtrscanProvider().parse(envelope({'SourceCode': SINGLE}), REGISTRY.get('bitlayer'), ADDRESS)


class TestBlockscoutProvider:
    
    def test_main_and_additional_sources(self):
        response = {
            'source_code': 'contract Main {}',
            'file_path': 'contracts/Main.sol',
            'additional_sources': [
                {'source_code': 'library L {}', 'file_path': 'contracts/L.sol'},
            ],
        }
        provider = BlockscoutProvider('https://explorer.mode.network')
        
        files = provider.parse(response, REGISTRY.get('mode'), ADDRESS)
        
        assert [(f.path, f.content) for f in files] == [
            (f'{ADDRESS}/contracts/Main.sol', 'contract Main {}'),
            (f'{ADDRESS}/contracts/L.sol', 'library L {}'),
        ]
    
    def test_placeholders_for_missing_paths(self):
        response = {'source_code': 'contract Main {}', 'additional_sources': [{'source_code': 'x'}]}
        
        files = BlockscoutProvider('https://explorer.mode.network').parse(
            response, REGISTRY.get('mode'), ADDRESS)
        
        assert files[0].path == f'{ADDRESS}/{NO_MAIN_FILE_PATH}'
        assert files[0].placeholders == ('file_path',)
        assert files[1].path == f'{ADDRESS}/{NO_ADDITIONAL_PATH}'
        assert files[1].is_partial
    
    def test_unverified(self):
        with pytest.raises(ProviderStatusError):
            BlockscoutProvider('https://explorer.mode.network').parse(
                {'message': 'Not found'}, REGISTRY.get('mode'), ADDRESS)
    
    def test_build_request(self):
        url, params = BlockscoutProvider('https://explorer.zora.energy/').build_request(
            ADDRESS, REGISTRY.get('zora'))
        
        assert url == f'https://explorer.zora.energy/api/v2/smart-contracts/{ADDRESS}'
        assert params == {}


class TestRawFetch:
    
    @patch('retriever.providers.base.requests.get')
    def test_fetch_parses_response(self, mock_get):
        mock_get.return_value = mock_response(envelope({'SourceCode': DOUBLED}))
        
        files = ScrollscanProvider(api_key='k', timeout=5).fetch(ADDRESS, REGISTRY.get('scroll'))
        
        assert len(files) == 1
        _, kwargs = mock_get.call_args
        assert kwargs['timeout'] == 5
        assert kwargs['params']['address'] == ADDRESS
    
    @patch('retriever.providers.base.requests.get')
    def test_network_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError('refused')
        
        with pytest.raises(TransportError) as exc:
            EtherscanV2Provider().fetch(ADDRESS, REGISTRY.get('eth'))
        assert exc.value.provider == 'etherscan'
        assert exc.value.chain == 'eth'
    
    @patch('retriever.providers.base.requests.get')
    def test_timeout(self, mock_get):
        mock_get.side_effect = requests.exceptions.Timeout()
        
        with pytest.raises(TransportError, match='timeout'):
            EtherscanV2Provider().fetch(ADDRESS, REGISTRY.get('eth'))
    
    @patch('retriever.providers.base.requests.get')
    def test_http_error(self, mock_get):
        mock_get.return_value = mock_response(status_code=502)
        
        with pytest.raises(TransportError) as exc:
            EtherscanV2Provider().fetch(ADDRESS, REGISTRY.get('eth'))
        assert exc.value.status_code == 502
    
    @patch('retriever.providers.base.requests.get')
    def test_blockscout_404_is_status_error(self, mock_get):
        mock_get.return_value = mock_response(status_code=404)
        
        with pytest.raises(ProviderStatusError):
            BlockscoutProvider('https://explorer.mode.network').fetch(ADDRESS, REGISTRY.get('mode'))
    
    @patch('retriever.providers.base.requests.get')
    def test_invalid_json_body(self, mock_get):
        mock_get.return_value = mock_response(json_error=json.JSONDecodeError('bad', '<html>', 0))
        
        with pytest.raises(DecodeError) as exc:
            EtherscanV2Provider().fetch(ADDRESS, REGISTRY.get('eth'))
        assert exc.value.stage == 'envelope'
    
    @patch('retriever.providers.base.requests.get')
    def test_decode_error_gets_context(self, mock_get):
        mock_get.return_value = mock_response({'status': '1', 'result': None})
        
        with pytest.raises(DecodeError) as exc:
            EtherscanV2Provider().fetch(ADDRESS, REGISTRY.get('base'))
        assert exc.value.address == ADDRESS
        assert exc.value.chain == 'base'
        assert exc.value.provider == 'etherscan'
