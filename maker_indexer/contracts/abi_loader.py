# maker_indexer/contracts/abi_loader.py

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from ..core.logging import LoggingMixin


class AbiLoadError(ValueError):
    pass


def parse_abi(abi_data: Union[str, List[Dict[str, Any]], Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Accept a bare ABI array or an object wrapping it under an 'abi' key"""
    if isinstance(abi_data, str):
        try:
            abi_data = json.loads(abi_data)
        except json.JSONDecodeError as e:
            raise AbiLoadError(f"ABI is not valid JSON: {e}") from e

    if isinstance(abi_data, list):
        return abi_data
    if isinstance(abi_data, dict) and 'abi' in abi_data:
        return abi_data['abi']

    raise AbiLoadError(f"Unexpected ABI format: {type(abi_data).__name__}")


class AbiLoader(LoggingMixin):
    """Loads contract ABIs from the filesystem with caching"""

    def __init__(self, abi_base_path: Path = None):
        self.abi_base_path = abi_base_path
        self._abi_cache: Dict[str, str] = {}

    def load_abi(self, abi_file: Union[str, Path]) -> str:
        abi_path = Path(abi_file)
        if self.abi_base_path is not None and not abi_path.is_absolute():
            abi_path = self.abi_base_path / abi_path

        cache_key = str(abi_path)
        if cache_key in self._abi_cache:
            return self._abi_cache[cache_key]

        if not abi_path.exists():
            self.log_warning("ABI file not found", abi_path=cache_key)
            raise AbiLoadError(f"ABI file not found: {abi_path}")

        with open(abi_path, 'r') as f:
            try:
                abi_data = json.load(f)
            except json.JSONDecodeError as e:
                self.log_warning("ABI file is not valid JSON", abi_path=cache_key, error=str(e))
                raise AbiLoadError(f"Invalid JSON in ABI file {abi_path}: {e}") from e

        abi = parse_abi(abi_data)

        abi_json = json.dumps(abi)
        self._abi_cache[cache_key] = abi_json

        self.log_debug("ABI loaded", abi_path=cache_key, entries=len(abi))
        return abi_json
