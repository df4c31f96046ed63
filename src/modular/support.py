"""Small helpers for building module paths and names."""

from typing import Hashable, Iterable, List, Optional, TypeVar

T = TypeVar("T", bound=Hashable)


def normalize_path(*parts: Optional[str]) -> str:
    """
    Join path fragments with forward slashes.

    Backslashes are converted, empty fragments are skipped and duplicate
    separators are collapsed. A leading slash on the first fragment is kept.
    """
    fragments: List[str] = []
    absolute = False
    for index, part in enumerate(parts):
        if not part:
            continue
        part = part.replace("\\", "/")
        if index == 0 and part.startswith("/"):
            absolute = True
        fragments.extend(piece for piece in part.split("/") if piece)

    path = "/".join(fragments)
    return f"/{path}" if absolute else path


def join_namespace(*parts: Optional[str]) -> str:
    """Join dotted namespace fragments, skipping empty ones."""
    return ".".join(part.strip(".") for part in parts if part and part.strip("."))


def replace(template: str, module: str, class_name: Optional[str] = None) -> str:
    """
    Fill a naming template for a module.

    Supported placeholders: {module}, {module_lower} and {class}.
    """
    result = template.replace("{module}", module).replace("{module_lower}", module.lower())
    if class_name is not None:
        result = result.replace("{class}", class_name)
    return result


def unique(items: Iterable[T]) -> List[T]:
    """Remove duplicates keeping the first occurrence of each item."""
    return list(dict.fromkeys(items))
