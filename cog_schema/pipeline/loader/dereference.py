"""
$ref dereferencing for input schemas.

Relative file references (``"other.schema#/definitions/x"``) and internal
references (``"#/definitions/x"``) are replaced by a copy of their target.
A reference that would recurse into itself is kept as a ``$ref`` to the
definitions of the loaded file so the composed schema stays finite; a loop
through another file is an error. Remote (URL) references are left alone.
"""

from __future__ import annotations

import json
import os
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ...errors import SchemaLoadError


def split_ref(ref: str) -> tuple[str, str]:
    """
    Split a $ref into (path part, fragment without the '#').

    Examples:
        "foo.schema#/a/b" -> ("foo.schema", "/a/b")
        "foo.schema" -> ("foo.schema", "")
        "#/a/b" -> ("", "/a/b")
    """
    if "#" not in ref:
        return ref, ""
    path, fragment = ref.split("#", 1)
    return path, fragment


def is_remote_ref(ref: str) -> bool:
    return "://" in ref


def _decode_pointer_token(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def resolve_pointer(document: Any, pointer: str, context: str) -> Any:
    """
    Resolve a JSON Pointer (RFC 6901) against a document.

    Args:
        document: Loaded JSON document
        pointer: Fragment without the '#', "" for the whole document
        context: Description used in error messages

    Raises:
        SchemaLoadError: If the pointer does not lead to a value
    """
    if pointer == "":
        return document
    if not pointer.startswith("/"):
        raise SchemaLoadError(f"Unsupported JSON pointer '{pointer}' in {context}.")

    current = document
    for raw_token in pointer[1:].split("/"):
        token = _decode_pointer_token(raw_token)
        if isinstance(current, list):
            try:
                current = current[int(token)]
            except (ValueError, IndexError) as e:
                raise SchemaLoadError(f"Bad list index '{token}' while resolving {context}.") from e
        elif isinstance(current, dict):
            if token not in current:
                raise SchemaLoadError(f"Missing key '{token}' while resolving {context}.")
            current = current[token]
        else:
            raise SchemaLoadError(f"Cannot resolve through a scalar while resolving {context}.")
    return current


def _merge_siblings(resolved: Any, siblings: dict[str, Any]) -> Any:
    """Keys written next to a $ref override the same keys of its target."""
    if not siblings:
        return resolved
    if not isinstance(resolved, dict):
        return resolved
    merged = dict(resolved)
    merged.update(siblings)
    return merged


@dataclass(frozen=True)
class RefKey:
    path: str
    pointer: str


class Dereferencer:
    """Inlines the $ref of a schema file and of every file it references."""

    def __init__(self, max_depth: int = 200):
        self.max_depth = max_depth
        self._documents: dict[str, Any] = {}

    def load_document(self, path: Path) -> Any:
        """Read and cache a JSON document."""
        key = str(path.resolve())
        if key not in self._documents:
            try:
                with open(path, encoding="utf-8") as f:
                    self._documents[key] = json.load(f)
            except OSError as e:
                raise SchemaLoadError(f"Cannot read {path}: {e.strerror or e}") from e
            except json.JSONDecodeError as e:
                raise SchemaLoadError(f"Error parsing {path}: {e}") from e
        return self._documents[key]

    def dereference(self, path: str | Path) -> Any:
        """
        Load a schema file with every resolvable $ref inlined.

        Args:
            path: Schema file to load

        Returns:
            A new JSON tree; cached documents are never mutated

        Raises:
            SchemaLoadError: If a file cannot be read or a reference cannot be resolved
        """
        path = Path(path).resolve()
        document = self.load_document(path)
        return self._inline(deepcopy(document), path, [RefKey(str(path), "")], 0)

    def _inline(self, node: Any, base: Path, stack: list[RefKey], depth: int) -> Any:
        if isinstance(node, list):
            return [self._inline(value, base, stack, depth) for value in node]
        if not isinstance(node, dict):
            return node

        ref = node.get("$ref")
        if isinstance(ref, str) and not is_remote_ref(ref):
            siblings = {k: v for k, v in node.items() if k != "$ref"}
            resolved = self._inline_ref(ref, base, stack, depth)
            siblings = {k: self._inline(v, base, stack, depth) for k, v in siblings.items()}
            return _merge_siblings(resolved, siblings)

        return {k: self._inline(v, base, stack, depth) for k, v in node.items()}

    def _inline_ref(self, ref: str, base: Path, stack: list[RefKey], depth: int) -> Any:
        path_part, pointer = split_ref(ref)
        target_path = base if path_part == "" else (base.parent / path_part).resolve()
        key = RefKey(str(target_path), pointer)

        if key in stack:
            return {"$ref": self._recursive_reference(ref, key, stack[0])}
        if depth > self.max_depth:
            raise SchemaLoadError(f"Maximum $ref depth ({self.max_depth}) exceeded resolving '{ref}' from {base}.")

        document = self.load_document(target_path)
        target = resolve_pointer(document, pointer, f"$ref '{ref}' from {os.path.basename(base)}")
        return self._inline(deepcopy(target), target_path, stack + [key], depth + 1)

    def _recursive_reference(self, ref: str, key: RefKey, root: RefKey) -> str:
        """
        Fragment a kept recursive $ref is rewritten to.

        Only a loop through the definitions of the file being loaded can be
        kept: the fragment must still lead to the same node once the file
        becomes one entry of the composite definitions map.

        Raises:
            SchemaLoadError: If the loop goes through another file or through
                the root of the document
        """
        if key.path != root.path:
            raise SchemaLoadError(
                f"Recursive $ref '{ref}' loops through {os.path.basename(key.path)}; "
                f"move the recursive definition into {os.path.basename(root.path)}."
            )
        if not key.pointer.startswith("/definitions/"):
            raise SchemaLoadError(
                f"Recursive $ref '{ref}' in {os.path.basename(root.path)} must point under #/definitions/."
            )
        return "#" + key.pointer
