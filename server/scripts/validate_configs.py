#!/usr/bin/env python3
"""
Validate tile-kinds.json
"""
import json
import sys
from pathlib import Path

# Expected structure
EXPECTED_KINDS = ['market', 'town', 'forest', 'cave', 'farm']
EXPECTED_COUNTS = ['building_count', 'obstacle_count', 'actor_count']
SEGMENT_COLUMNS = 10
SEGMENT_ROWS = 10

def validate_tile_kinds():
    """Validate tile-kinds.json"""
    print("Validating tile-kinds.json...")
    config_path = Path(__file__).parent.parent / 'config' / 'tile-kinds.json'

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        print(f"✗ Invalid JSON: {e}")
        return False
    except FileNotFoundError:
        print(f"✗ File not found: {config_path}")
        return False

    if 'tile_kinds' not in data:
        print("✗ Missing top-level 'tile_kinds' key")
        return False
    print("✓ Top-level 'tile_kinds' key present")

    kinds = data['tile_kinds']
    missing_kinds = [k for k in EXPECTED_KINDS if k not in kinds]
    if missing_kinds:
        print(f"✗ Missing kinds: {missing_kinds}")
        return False
    print(f"✓ All {len(EXPECTED_KINDS)} reference kinds present")

    invalid_entries = {}
    for name, kind in kinds.items():
        for count_key in EXPECTED_COUNTS:
            count = kind.get(count_key)
            if not isinstance(count, dict) or 'min' not in count or 'max' not in count:
                invalid_entries.setdefault(name, []).append(f'{count_key} missing min/max')
            elif count['min'] < 0 or count['max'] < count['min']:
                invalid_entries.setdefault(name, []).append(f'{count_key} invalid range')

        footprint = kind.get('building_footprint')
        if not isinstance(footprint, dict) or 'width' not in footprint or 'height' not in footprint:
            invalid_entries.setdefault(name, []).append('building_footprint missing width/height')
        elif footprint['width'] <= 0 or footprint['height'] <= 0:
            invalid_entries.setdefault(name, []).append('building_footprint not positive')

    if invalid_entries:
        print(f"✗ Invalid kinds: {invalid_entries}")
        return False
    print("✓ All count ranges and footprints well formed")

    # Test loading with actual module
    try:
        sys.path.insert(0, str(Path(__file__).parent.parent))
        from internal.tilegen import tile_kinds
        loaded = tile_kinds.load_tile_kinds(config_path, SEGMENT_COLUMNS, SEGMENT_ROWS)
        print(f"✓ Module loaded {len(loaded)} kinds for a {SEGMENT_COLUMNS}x{SEGMENT_ROWS} segment")
    except ValueError as e:
        print(f"✗ Module rejected config: {e}")
        return False

    return True

if __name__ == '__main__':
    if validate_tile_kinds():
        print("\n✓ All validations passed!")
        sys.exit(0)
    else:
        print("\n✗ Some validations failed")
        sys.exit(1)
