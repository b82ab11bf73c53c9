"""
Tests for Prompt Policy

Tests the reviewer system instruction.
"""

import pytest

from reviewx.services.prompt_policy import PromptPolicy


class TestPromptPolicy:
    """Test suite for PromptPolicy."""

    def test_default_instruction(self):
        """Test the built-in reviewer persona is used by default."""
        instruction = PromptPolicy().get_system_instruction()

        assert instruction == PromptPolicy.SYSTEM_INSTRUCTION
        assert "code reviewer" in instruction
        assert "Corrected Code" in instruction

    def test_instruction_is_stable(self):
        """Test repeated calls return the same instruction."""
        policy = PromptPolicy()

        assert policy.get_system_instruction() is policy.get_system_instruction()

    def test_custom_instruction(self):
        """Test a custom instruction replaces the default."""
        policy = PromptPolicy("  Review for security only.  ")

        assert policy.get_system_instruction() == "Review for security only."

    @pytest.mark.parametrize("instruction", [None, "", "   "])
    def test_blank_override_keeps_default(self, instruction):
        """Test blank overrides are ignored."""
        policy = PromptPolicy(instruction)

        assert policy.get_system_instruction() == PromptPolicy.SYSTEM_INSTRUCTION
