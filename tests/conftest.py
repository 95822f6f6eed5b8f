"""Pytest configuration and fixtures."""

import pytest

from blocks import cell, key, line, page, response, selection, table, value, word


@pytest.fixture
def form_response():
    """One page with two lines and a single key/value pair."""
    return response(
        page("p1", children=["l1", "l2", "k1", "v1"]),
        line("l1", "First Name:", children=["w1", "w2"]),
        word("w1", "First"),
        word("w2", "Name:"),
        line("l2", "Jane", children=["w3"]),
        word("w3", "Jane"),
        key("k1", children=["w1", "w2"], values=["v1"]),
        value("v1", children=["w3"]),
    )


@pytest.fixture
def sample_response():
    """One page mixing lines, a form with a check box, and a 2x2 table."""
    return response(
        page("p1"),
        line("l1", "Application Form", children=["w1", "w2"]),
        word("w1", "Application"),
        word("w2", "Form"),
        key("k1", children=["w3", "w4"], values=["v1"]),
        word("w3", "First"),
        word("w4", "Name"),
        value("v1", children=["w5"]),
        word("w5", "Jane"),
        key("k2", children=["w6"], values=["v2"]),
        word("w6", "Married"),
        value("v2", children=["s1"]),
        selection("s1", "SELECTED"),
        table("t1", children=["c11", "c12", "c21", "c22"]),
        cell("c11", 1, 1, children=["w7"]),
        cell("c12", 1, 2, children=["w8"]),
        cell("c21", 2, 1, children=["w9"]),
        cell("c22", 2, 2, children=["w10"]),
        word("w7", "Item"),
        word("w8", "Qty"),
        word("w9", "Apples"),
        word("w10", "3"),
        line("l2", "Thank you", children=["w11", "w12"]),
        word("w11", "Thank"),
        word("w12", "you"),
    )


@pytest.fixture
def output_dir(tmp_path):
    """Create a temporary output directory."""
    out_dir = tmp_path / "output"
    out_dir.mkdir()
    return out_dir
