"""Reduce Python modules to their public signatures.

Function bodies are replaced with ``...`` (docstrings kept unless the
``keep_docstrings`` option is false); imports, classes and module-level
assignments survive. Files that do not parse are returned unchanged.
"""

from __future__ import annotations

import ast
import logging
from typing import Any, List, Mapping, Union

logger = logging.getLogger(__name__)

FunctionNode = Union[ast.FunctionDef, ast.AsyncFunctionDef]

_KEEP_TOP_LEVEL = (
    ast.Import, ast.ImportFrom, ast.Assign, ast.AnnAssign,
    ast.ClassDef, ast.FunctionDef, ast.AsyncFunctionDef,
)


def _docstring_expr(node: ast.AST) -> List[ast.stmt]:
    body = getattr(node, "body", [])
    if body and isinstance(body[0], ast.Expr) and isinstance(getattr(body[0], "value", None), ast.Constant) \
            and isinstance(body[0].value.value, str):
        return [body[0]]
    return []


class PythonSignatureModifier:
    id = "python-signature"

    def supports(self, path: str) -> bool:
        return path.endswith((".py", ".pyi"))

    def modify(self, content: str, context: Mapping[str, Any]) -> str:
        try:
            tree = ast.parse(content)
        except SyntaxError as e:
            logger.debug("python-signature skipped unparsable content: %s", e)
            return content

        keep_docstrings = bool(context.get("keep_docstrings", True))
        include_private = bool(context.get("include_private", False))

        tree.body = [
            self._strip(node, keep_docstrings, include_private)
            for node in tree.body
            if isinstance(node, _KEEP_TOP_LEVEL) and self._public(node, include_private)
        ]
        return ast.unparse(tree) + "\n"

    def _public(self, node: ast.stmt, include_private: bool) -> bool:
        if include_private or not isinstance(node, (ast.ClassDef, ast.FunctionDef, ast.AsyncFunctionDef)):
            return True
        name = node.name
        return not name.startswith("_") or (name.startswith("__") and name.endswith("__"))

    def _strip(self, node: ast.stmt, keep_docstrings: bool, include_private: bool) -> ast.stmt:
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
            doc = _docstring_expr(node) if keep_docstrings else []
            node.body = doc + [ast.Expr(value=ast.Constant(value=Ellipsis))]
        elif isinstance(node, ast.ClassDef):
            doc = _docstring_expr(node) if keep_docstrings else []
            members = [
                self._strip(child, keep_docstrings, include_private)
                for child in node.body
                if isinstance(child, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef, ast.Assign, ast.AnnAssign))
                and self._public(child, include_private)
            ]
            node.body = doc + members or [ast.Expr(value=ast.Constant(value=Ellipsis))]
        return node
