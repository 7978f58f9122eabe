"""Tree-sitter language loader helpers."""

from __future__ import annotations


def load_go_language():
    """Return a Tree-sitter Language object for Go."""
    from tree_sitter import Language

    try:
        import tree_sitter_go as tsgo
    except ImportError as exc:  # pragma: no cover - import guard
        raise RuntimeError("tree_sitter_go is not installed") from exc

    # tree_sitter_go exposes either `language` (callable or object) or `LANGUAGE`.
    if hasattr(tsgo, "language"):
        lang = tsgo.language
        lang = lang() if callable(lang) else lang
    elif hasattr(tsgo, "LANGUAGE"):
        lang = tsgo.LANGUAGE
    else:
        raise RuntimeError("Unsupported tree_sitter_go API")

    # Newer bindings hand out a PyCapsule; wrap to Language if needed.
    if isinstance(lang, Language):
        return lang
    return Language(lang)
