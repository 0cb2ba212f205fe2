#!/usr/bin/env python3
"""
Decoding of explorer "SourceCode" payloads into normalized source files.

Explorers embed multi-file projects as a JSON document inside a string.
Depending on the explorer that document is:
- wrapped in doubled braces ({{ ... }}), Etherscan standard-json style
- wrapped in one extra brace layer that must be stripped
- already a bare JSON object
A verified single-file contract is just the flat source text.

Each wrapping convention has its own decode_* function so adapters name the
strategy they use. Everything here is stateless.
"""

import json
from typing import Any, List, Mapping, Optional, Tuple

from retriever.core.errors import DecodeError
from retriever.core.job import SourceFile
from retriever.utils.logger import setup_logger


def _logger():
    return setup_logger('retriever.decoding')


# Sentinel text written when the explorer omits a field
NO_CONTENT = 'Error: No content'
NO_MAIN_FILE_PATH = 'Error: No main file path'
NO_ADDITIONAL_CODE = 'Error: No additional_sources code'
NO_ADDITIONAL_PATH = 'Error: No additional_sources file path'
UNKNOWN_CONTRACT_NAME = 'Unknown'
PLACEHOLDER_FILE_NAME = 'Main.sol'


def sanitize_rel(rel: str) -> str:
    """
    Sanitize a source path into a pure relative path:
    - Normalize backslashes to forward slashes
    - Strip Windows drive letters (C:/)
    - Strip leading absolute path slashes (e.g., /home/user/...)
    - Drop '.' and '..' components
    """
    rel = rel.replace('\\', '/')
    if ':' in rel[:3]:
        rel = rel.split(':', 1)[1]
    parts = [p for p in rel.split('/') if p not in ('', '.', '..')]
    return '/'.join(parts) or PLACEHOLDER_FILE_NAME


def is_brace_doubled(text: str) -> bool:
    s = text.strip()
    return s.startswith('{{') and s.endswith('}}')


def _loads(text: str, stage: str) -> Any:
    try:
        return json.loads(text)
    except ValueError as e:
        raise DecodeError(f"Invalid JSON in source payload ({stage})",
                          stage=stage, original_error=e)


def decode_pre_unwrapped(text: str) -> Any:
    """SourceCode is already a bare JSON object"""
    return _loads(text.strip(), 'pre_unwrapped')


def decode_single_brace_stripped(text: str) -> Any:
    """Strip exactly one outer brace pair, only when there is one to spare"""
    s = text.strip()
    if is_brace_doubled(s):
        s = s[1:-1]
    return _loads(s, 'single_brace')


def decode_brace_doubled(text: str) -> Any:
    """
    Undo brace doubling ({{ ... }}).

    Peeling the outer layer is tried first; literal {{ -> { / }} -> }
    replacement is the fallback for payloads where every brace pair was
    doubled. Text without doubling is parsed as-is.
    """
    s = text.strip()
    if not is_brace_doubled(s):
        return _loads(s, 'brace_doubled')
    try:
        return json.loads(s[1:-1])
    except ValueError:
        _logger().debug("outer brace peel failed, falling back to literal replacement")
    return _loads(s.replace('{{', '{').replace('}}', '}'), 'brace_doubled')


def sources_of(document: Any) -> Mapping[str, Any]:
    """The `sources` mapping of a standard-json document, empty if absent"""
    if isinstance(document, dict) and isinstance(document.get('sources'), dict):
        return document['sources']
    return {}


def looks_like_multipart(document: Any) -> bool:
    """Older Etherscan layout: {path: {content: ...}} without a sources key"""
    return (
        isinstance(document, dict)
        and bool(document)
        and all(isinstance(v, dict) and 'content' in v for v in document.values())
    )


def address_segment(address: str) -> str:
    """Address as a single path segment, ValueError if it would leave its directory"""
    segment = address.strip()
    if not segment or segment in ('.', '..') or '/' in segment or '\\' in segment:
        raise ValueError(f"Invalid contract address: {address!r}")
    return segment


def make_source_file(chain: str, address: str, path: str, content: str,
                     placeholders: Tuple[str, ...] = ()) -> SourceFile:
    """Build a SourceFile namespaced under its address, flagging placeholders"""
    source = SourceFile(
        chain=chain,
        address=address,
        path=f"{address_segment(address)}/{sanitize_rel(path)}",
        content=content,
        placeholders=placeholders,
    )
    for missing in placeholders:
        _logger().warning(
            f"missing_field {missing} in {chain}/{source.path}, placeholder written",
            extra={'chain': chain, 'address': address, 'field': missing},
        )
    return source


def normalize_sources(sources: Mapping[str, Any], chain: str, address: str) -> List[SourceFile]:
    """One SourceFile per `path -> {content}` entry"""
    files = []
    for file_path, file_data in sources.items():
        content = file_data.get('content') if isinstance(file_data, dict) else None
        if isinstance(content, str):
            files.append(make_source_file(chain, address, file_path, content))
        else:
            files.append(make_source_file(chain, address, file_path, NO_CONTENT, ('content',)))
    return files


def contract_file_name(entry: Mapping[str, Any]) -> Tuple[str, Tuple[str, ...]]:
    """`<ContractName>.sol` (or .vy for Vyper), with placeholder name when absent"""
    name = entry.get('ContractName')
    placeholders: Tuple[str, ...] = ()
    if not isinstance(name, str) or not name:
        name = UNKNOWN_CONTRACT_NAME
        placeholders = ('ContractName',)
    compiler = entry.get('CompilerVersion') or ''
    ext = 'vy' if str(compiler).lower().startswith('vyper') else 'sol'
    return f"{name}.{ext}", placeholders


def normalize_mixed_entry(entry: Mapping[str, Any], chain: str, address: str) -> List[SourceFile]:
    """
    Decode one `result[]` entry whose SourceCode may be empty, a brace-doubled
    standard-json blob, a single-brace multi-part blob or flat source text.
    """
    source_code: Optional[str] = entry.get('SourceCode')
    if not isinstance(source_code, str) or not source_code.strip():
        _logger().info(f"Empty SourceCode for {address} on {chain}, skipping entry")
        return []

    if is_brace_doubled(source_code):
        sources = sources_of(decode_brace_doubled(source_code))
        if not sources:
            _logger().warning(f"No sources in brace-doubled SourceCode for {address} on {chain}")
        return normalize_sources(sources, chain, address)

    stripped = source_code.strip()
    if stripped.startswith('{') and stripped.endswith('}'):
        try:
            document = json.loads(stripped)
        except ValueError:
            document = None
        if looks_like_multipart(document):
            return normalize_sources(document, chain, address)
        if sources_of(document):
            return normalize_sources(sources_of(document), chain, address)
        _logger().debug(f"SourceCode for {address} is brace-wrapped but not a source map, keeping flat")

    file_name, placeholders = contract_file_name(entry)
    return [make_source_file(chain, address, file_name, source_code, placeholders)]
