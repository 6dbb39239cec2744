"""Tests for compression prompt construction."""

from snapshot_compressor.prompts import COMPRESSION_PROMPT, build_content_message, build_prompt


def test_policy_text_keeps_refs_and_target():
    """Test the fixed policy mentions what must be kept and the size target."""
    assert COMPRESSION_PROMPT.startswith("# Browser Tool Proxy Sub-Agent")
    assert "ALL refs `[N]`" in COMPRESSION_PROMPT
    assert "Cookie/privacy banners" in COMPRESSION_PROMPT
    assert "~40-70% of original length" in COMPRESSION_PROMPT
    assert COMPRESSION_PROMPT.endswith("Return no more than 10K tokens.")


def test_content_message_with_purpose():
    assert build_content_message("body", "prices") == (
        "Purpose: prices\n\nContent to compress:\n\nbody"
    )


def test_content_message_without_purpose():
    assert build_content_message("body") == "Content to compress:\n\nbody"
    assert build_content_message("body", "") == "Content to compress:\n\nbody"


def test_prompt_prefixes_policy():
    assert build_prompt("body", "prices") == (
        f"{COMPRESSION_PROMPT}\n\nPurpose: prices\n\nContent to compress:\n\nbody"
    )
