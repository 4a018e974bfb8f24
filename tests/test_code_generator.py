"""Tests for branch code generation."""

import random
import re

from managers.code_generator import code_matches, code_prefix, generate_branch_code, is_valid_branch_code


class TestGenerateBranchCode:
    """Tests for generate_branch_code."""

    def test_sub_code_shape(self):
        """Sub branches end in S and use the uppercased name prefix."""
        code = generate_branch_code("Westside Hub", "Sub", random.Random(7))

        assert re.fullmatch(r"NX-WE-\d{4}-S", code)

    def test_main_code_suffix(self):
        """Main branches end in M."""
        assert generate_branch_code("downtown", "Main", random.Random(7)).endswith("-M")

    def test_random_part_is_four_digits(self):
        """The random part stays within 1000..9999."""
        rng = random.Random(0)
        for _ in range(200):
            digits = int(generate_branch_code("North Hub", "Sub", rng).split("-")[2])
            assert 1000 <= digits <= 9999

    def test_short_names_produce_no_code(self):
        """Names under two characters leave the code empty."""
        assert generate_branch_code("A", "Sub") == ""
        assert generate_branch_code("  ", "Main") == ""
        assert generate_branch_code(None, "Sub") == ""

    def test_generated_codes_validate(self):
        """Everything the generator emits passes the shape check."""
        assert is_valid_branch_code(generate_branch_code("Ab", "Main"))


class TestIsValidBranchCode:
    """Tests for is_valid_branch_code."""

    def test_rejects_other_shapes(self):
        assert not is_valid_branch_code("")
        assert not is_valid_branch_code(None)
        assert not is_valid_branch_code("NX-WE-123-S")
        assert not is_valid_branch_code("NX-WE-1234-X")
        assert not is_valid_branch_code("BR-A1B2C3")
        assert not is_valid_branch_code("NX-a--1234-S")
        assert not is_valid_branch_code("NX-A_-1234-S")
        assert not is_valid_branch_code("NX- A-1234-S")


class TestCodeMatches:
    """Tests for code_prefix and code_matches."""

    def test_prefix_skips_spaces_and_punctuation(self):
        assert code_prefix("Westside Hub") == "WE"
        assert code_prefix("A-B Plaza") == "AB"
        assert code_prefix("đà nẵng") == "ĐÀ"
        assert code_prefix("A") == ""

    def test_code_must_follow_name_and_type(self):
        """A well-shaped code still has to belong to the record."""
        assert code_matches("NX-EA-1111-M", "Eastgate Center", "Main")
        assert not code_matches("NX-ZZ-1111-S", "Eastgate Center", "Main")
        assert not code_matches("NX-EA-1111-S", "Eastgate Center", "Main")
        assert not code_matches("NX-ZZ-1111-M", "Eastgate Center", "Main")
        assert not code_matches(None, "Eastgate Center", "Main")
