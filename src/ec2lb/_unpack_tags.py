from typing import Dict, Tuple


def unpack_tags(tags: str | None) -> Tuple[Tuple[str, str], ...]:
    tags_unpacked: list[Tuple[str, str]] = []
    if tags:
        for tag in tags.split(";"):
            try:
                key, value = tag.split("=")
            except ValueError:
                raise ValueError(
                    "Tags must be in the format 'key1=value1;key2=value2', "
                    f"but instead got {tags}"
                )
            tags_unpacked.append((key.strip(), value.strip()))
    return tuple(tags_unpacked)


def tags_as_dict(
    base: Dict[str, str], extra: Tuple[Tuple[str, str], ...]
) -> Dict[str, str]:
    merged = dict(base)
    merged.update(extra)
    return merged
