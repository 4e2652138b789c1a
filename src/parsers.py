from typing import List, Optional

from models import Classification, DetailRecord, PackageRecord

# -Qi label (lowercased, spaces removed) -> DetailRecord attribute
SCALAR_FIELDS = {
    "name": "name",
    "version": "version",
    "description": "description",
    "url": "url",
    "installedsize": "installed_size",
    "installreason": "install_reason",
}

# List fields pacman wraps differently: dependency lists keep the whole value
# as one token, reverse dependencies are space separated.
WHOLE_VALUE_LISTS = {
    "dependson": "depends_on",
    "optionaldeps": "optional_dependencies",
}
SPLIT_LISTS = {
    "requiredby": "required_by",
    "optionalfor": "optional_for",
}


def parse_package_list(text: str, classification: Classification) -> List[PackageRecord]:
    """Parse ``pacman -Q`` style "name version" lines into package records."""

    records: List[PackageRecord] = []
    for line in text.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        records.append(PackageRecord(name=parts[0], version=parts[1], classification=classification))
    return records


def _list_tokens(key: str, value: str) -> List[str]:
    if key in SPLIT_LISTS:
        return value.split()
    return [value] if value else []


def parse_detail_block(text: str) -> DetailRecord:
    """Parse the "Key : value" block printed by ``pacman -Qi``.

    Unknown keys and lines without a colon are ignored. Indented lines that
    follow a list field continue that field.
    """

    details = DetailRecord()
    current_list: Optional[str] = None

    for line in text.splitlines():
        if not line.strip():
            current_list = None
            continue

        if line[0].isspace() and current_list is not None:
            tokens = getattr(details, WHOLE_VALUE_LISTS.get(current_list) or SPLIT_LISTS[current_list])
            stripped = line.strip()
            if current_list in SPLIT_LISTS:
                tokens.extend(stripped.split())
            elif tokens:
                tokens[-1] += " " + stripped
            else:
                tokens.append(stripped)
            continue

        if ":" not in line:
            current_list = None
            continue
        raw_key, value = line.split(":", 1)
        key = raw_key.lower().replace(" ", "")
        value = value.strip()

        if key in SCALAR_FIELDS:
            setattr(details, SCALAR_FIELDS[key], value)
            current_list = None
        elif key in WHOLE_VALUE_LISTS or key in SPLIT_LISTS:
            attr = WHOLE_VALUE_LISTS.get(key) or SPLIT_LISTS[key]
            setattr(details, attr, _list_tokens(key, value))
            current_list = key
        elif not line[0].isspace():
            current_list = None

    return details
