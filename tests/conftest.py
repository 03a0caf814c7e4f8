"""Shared fixtures for graphpersist tests."""

from __future__ import annotations

import pytest


@pytest.fixture
def graphml_doc():
    """Return a helper that wraps graph elements in a GraphML root, as bytes."""

    def build(body: str, root: str = "graphml") -> bytes:
        return (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            f'<{root} xmlns="http://graphml.graphdrawing.org/xmlns">\n'
            f"{body}\n"
            f"</{root}>\n"
        ).encode("utf-8")

    return build
