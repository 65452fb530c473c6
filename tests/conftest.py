"""Pytest configuration and shared fixtures for the glfm_markdown test suite.

This module provides shared fixtures, test configuration, and helpers that
are used across the entire test suite.
"""

import logging
import os

import pytest

from glfm_markdown.ast import Document, List, Paragraph, TaskItem, Text
from glfm_markdown.options import GlfmUserOptions, HtmlFormatterOptions
from glfm_markdown.renderers import GlfmHtmlFormatter

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "security: Tests of URL and raw HTML safety")


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo CLI logging configuration so caplog sees package records."""
    yield
    package_logger = logging.getLogger("glfm_markdown")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


def render_glfm(doc, **flags):
    """Render ``doc`` with the GLFM formatter, splitting ``flags`` between option records."""
    user_fields = {"default_html", "inapplicable_tasks", "placeholder_detection", "debug"}
    user = GlfmUserOptions(**{k: v for k, v in flags.items() if k in user_fields})
    options = HtmlFormatterOptions(**{k: v for k, v in flags.items() if k not in user_fields})
    return GlfmHtmlFormatter(options, user).format_document(doc)


@pytest.fixture
def glfm_render():
    """Provide the GLFM render helper.

    Returns
    -------
    callable
        ``glfm_render(doc, **flags) -> str``

    """
    return render_glfm


@pytest.fixture
def paragraph_doc():
    """Build a one-paragraph document from a list of inline nodes."""

    def build(*inlines):
        return Document(children=[Paragraph(content=list(inlines))])

    return build


@pytest.fixture
def task_list_doc():
    """Build a tight task list with one item per ``(symbol, text)`` pair."""

    def build(*items):
        task_items = [TaskItem(symbol=symbol, children=[Paragraph(content=[Text(content=text)])]) for symbol, text in items]
        return Document(children=[List(items=task_items, is_task_list=True)])

    return build


@pytest.fixture
def sample_markdown() -> str:
    """Provide sample GitLab Flavored Markdown for pipeline tests.

    Returns
    -------
    str
        Document exercising placeholders and every task item state.

    """
    return """# Release checklist

Deploy to %{environment} before the freeze.
See [the runbook](https://docs.example.com/%{team}/runbook) for details.

- [x] Tag the release
- [ ] Publish notes
- [~] Update the legacy mirror
"""
