"""Structural diff and merge over translation trees.

A translation tree is a dict whose values are either strings (leaf
translations) or nested translation trees. Key paths address one node and
are dot-joined for external representation (``"navigation.home"``).

All functions here are pure: inputs are never mutated.

Main operations:
- find_missing_content: content present in the source but not the target
- find_obsolete_paths / find_obsolete_keys: key paths present in the target
  but not the source
- deep_merge: overlay a partial tree onto an existing one
- remove_keys: prune a list of key paths
- get_by_path: read one leaf with a default
"""

import copy
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from infrastructure.i18n.exceptions import MalformedTreeError

TranslationTree = Dict[str, Any]
KeyPath = Union[str, Sequence[str]]

PATH_SEPARATOR = "."


def split_path(path: KeyPath) -> List[str]:
    """Split a dotted key path into its segments.

    Sequences are returned as a list unchanged, so callers may address keys
    that themselves contain dots.
    """
    if isinstance(path, str):
        return path.split(PATH_SEPARATOR) if path else []
    return list(path)


def join_path(*segments: str) -> str:
    """Join key path segments, skipping empty ones."""
    return PATH_SEPARATOR.join(segment for segment in segments if segment)


def is_tree(value: Any) -> bool:
    """Check whether ``value`` is a well-formed translation tree."""
    try:
        validate_tree(value)
    except MalformedTreeError:
        return False
    return True


def validate_tree(value: Any, _path: str = "") -> None:
    """Validate that ``value`` is a translation tree.

    Only dicts with string keys and string or dict values are accepted.
    Arrays, nulls, numbers and booleans are malformed at any depth.

    Raises:
        MalformedTreeError: naming the dotted path of the first bad node.
    """
    if not isinstance(value, dict):
        raise MalformedTreeError(
            f"Expected a mapping, got {type(value).__name__}", _path or None
        )

    for key, child in value.items():
        if not isinstance(key, str):
            raise MalformedTreeError(
                f"Keys must be strings, got {type(key).__name__}", _path or None
            )
        child_path = join_path(_path, key)
        if isinstance(child, dict):
            validate_tree(child, child_path)
        elif not isinstance(child, str):
            raise MalformedTreeError(
                f"Leaf values must be strings, got {type(child).__name__}",
                child_path,
            )


def _is_branch(value: Any) -> bool:
    return isinstance(value, dict)


def find_missing_content(
    source: Mapping[str, Any], target: Mapping[str, Any]
) -> TranslationTree:
    """Return the part of ``source`` that ``target`` does not cover.

    - A key absent from ``target`` brings its whole source value.
    - Two subtrees are compared recursively; the key is kept only when the
      nested result is non-empty.
    - A source subtree facing a target leaf is missing in full.
    - Two leaves are considered present whatever their values, so existing
      translations are never overwritten.

    Example:
        >>> find_missing_content({"a": {"b": "1", "c": "2"}}, {"a": {"b": "x"}})
        {'a': {'c': '2'}}
    """
    missing: TranslationTree = {}

    for key, source_value in source.items():
        if key not in target:
            missing[key] = copy.deepcopy(source_value)
            continue

        if not _is_branch(source_value):
            continue

        target_value = target[key]
        if _is_branch(target_value):
            nested = find_missing_content(source_value, target_value)
            if nested:
                missing[key] = nested
        else:
            missing[key] = copy.deepcopy(source_value)

    return missing


def find_obsolete_paths(
    source: Mapping[str, Any], target: Mapping[str, Any]
) -> List[Tuple[str, ...]]:
    """Return key paths present in ``target`` but not in ``source``.

    Each path is a tuple of segments, so keys containing dots are addressed
    exactly; pass the result straight to remove_keys. Paths are listed in
    the iteration order of ``target``. A target subtree facing a source leaf
    is obsolete as a whole; a target leaf facing a source subtree is not,
    since find_missing_content replaces it.

    Example:
        >>> find_obsolete_paths({"a": {}}, {"a": {"b.c": "1"}})
        [('a', 'b.c')]
    """
    obsolete: List[Tuple[str, ...]] = []

    def walk(src: Mapping[str, Any], tgt: Mapping[str, Any], prefix: Tuple[str, ...]):
        for key, target_value in tgt.items():
            current = prefix + (key,)

            if key not in src:
                obsolete.append(current)
                continue

            if not _is_branch(target_value):
                continue

            source_value = src[key]
            if _is_branch(source_value):
                walk(source_value, target_value, current)
            else:
                obsolete.append(current)

    walk(source, target, ())
    return obsolete


def find_obsolete_keys(
    source: Mapping[str, Any], target: Mapping[str, Any]
) -> List[str]:
    """Dotted form of find_obsolete_paths, for reports and logs.

    Not suitable for remove_keys when keys themselves contain dots.

    Example:
        >>> find_obsolete_keys({"a": "1"}, {"a": "1", "b": "2"})
        ['b']
    """
    return [PATH_SEPARATOR.join(path) for path in find_obsolete_paths(source, target)]


def deep_merge(
    base: Mapping[str, Any], overlay: Mapping[str, Any]
) -> TranslationTree:
    """Merge ``overlay`` into a copy of ``base``.

    Subtrees present on both sides merge recursively; on any other conflict
    the overlay value wins. Keys only in ``base`` are kept untouched.
    Neither input is modified.
    """
    result: TranslationTree = copy.deepcopy(dict(base))

    for key, overlay_value in overlay.items():
        base_value = result.get(key)
        if _is_branch(overlay_value) and _is_branch(base_value):
            result[key] = deep_merge(base_value, overlay_value)
        else:
            result[key] = copy.deepcopy(overlay_value)

    return result


def remove_keys(
    tree: Mapping[str, Any], paths: Sequence[KeyPath]
) -> TranslationTree:
    """Return a copy of ``tree`` without the given key paths.

    A path whose intermediate segment is missing or is a leaf is skipped
    silently, which makes pruning idempotent.

    Example:
        >>> remove_keys({"a": {"b": "1"}}, ["a.b.c"])
        {'a': {'b': '1'}}
    """
    result: TranslationTree = copy.deepcopy(dict(tree))

    for path in paths:
        segments = split_path(path)
        if not segments:
            continue

        parent: Any = result
        for segment in segments[:-1]:
            child = parent.get(segment)
            if not _is_branch(child):
                parent = None
                break
            parent = child

        if parent is not None:
            parent.pop(segments[-1], None)

    return result


def get_by_path(
    tree: Optional[Mapping[str, Any]], path: KeyPath, default: str = ""
) -> str:
    """Look up the string leaf at ``path``.

    Returns ``default`` when the tree is empty, a segment is missing, or the
    path ends on a subtree rather than a leaf.
    """
    node: Any = tree
    for segment in split_path(path):
        if not _is_branch(node) or segment not in node:
            return default
        node = node[segment]

    return node if isinstance(node, str) else default


def count_leaves(tree: Mapping[str, Any]) -> int:
    """Count the string leaves of a tree."""
    total = 0
    for value in tree.values():
        total += count_leaves(value) if _is_branch(value) else 1
    return total
