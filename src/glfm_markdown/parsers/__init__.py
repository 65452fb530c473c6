#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/glfm_markdown/parsers/__init__.py
"""Markdown parsing into the glfm_markdown AST."""

from glfm_markdown.parsers.markdown import MarkdownToAstConverter, markdown_to_ast, task_items_plugin

__all__ = ["MarkdownToAstConverter", "markdown_to_ast", "task_items_plugin"]
