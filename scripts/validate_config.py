#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List, Optional

import yaml

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pal_setup.config.loader import ConfigLoader  # noqa: E402
from pal_setup.config.validation import ConfigValidator, ValidationError  # noqa: E402


def configured_symbols(config_dir: Path) -> List[str]:
    """Symbols that have an entry in instruments.yaml."""
    instruments_file = config_dir / "instruments.yaml"
    if not instruments_file.exists():
        return []
    with open(instruments_file) as f:
        data = yaml.safe_load(f) or {}
    return sorted(data.get("instruments", {}))


def validate_symbol_config(loader: ConfigLoader, symbol: str) -> List[ValidationError]:
    """Validate the merged configuration for a specific symbol."""
    config = loader.merge_config(symbol)
    return ConfigValidator.validate_config(config)


def main(config_dir: Optional[str] = None) -> int:
    """Validate every symbol entry plus the bare defaults."""
    print("Validating PalSetup configuration...")

    loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
    symbols = configured_symbols(loader.config_dir) + ["UNKNOWN-SYMBOL"]  # Should use defaults

    all_valid = True

    for symbol in symbols:
        errors = validate_symbol_config(loader, symbol)
        if errors:
            print(f"{symbol}: {len(errors)} validation errors")
            for error in errors:
                print(f"  - {error.field}: {error.message} (value: {error.value!r})")
            all_valid = False
        else:
            print(f"{symbol}: ok")

    if all_valid:
        print("All configuration validation passed")
        return 0

    print("Configuration validation failed")
    return 1


if __name__ == "__main__":
    sys.exit(main(sys.argv[1] if len(sys.argv) > 1 else None))
