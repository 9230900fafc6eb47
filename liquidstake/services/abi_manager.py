"""Loads contract ABIs from Hardhat-style artifact JSON files."""

import json
from functools import lru_cache
from pathlib import Path

from config import get_settings


class ABIManager:
    def __init__(self, abi_dir: Path | str | None = None):
        """
        Initializes the ABIManager with the directory containing ABI JSON files.

        :param abi_dir: The directory where artifact files are stored. Defaults to
            the configured ``CONTRACT_ABI_DIR``.
        """
        self.abi_dir: Path = Path(abi_dir or get_settings().contracts.abi_dir)

    def load_abi(self, artifact_name: str) -> list[dict[str, object]]:
        """
        Loads the ABI from a specified artifact JSON file.

        :param artifact_name: The name of the artifact file (without .json extension).
        :return: The ABI extracted from the specified artifact JSON file.
        :raises FileNotFoundError: If the specified file does not exist.
        :raises KeyError: If the 'abi' key is not found in the JSON data.
        """
        return _read_abi(self.abi_dir / f"{artifact_name}.json")


@lru_cache
def _read_abi(file_path: Path) -> list[dict[str, object]]:
    if not file_path.exists():
        raise FileNotFoundError(f"No such file: {file_path}")

    with file_path.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    if "abi" not in data:
        raise KeyError(f"Missing 'abi' key in {file_path.name}.")
    return data["abi"]
