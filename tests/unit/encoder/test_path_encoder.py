"""Tests for result-path construction and buffer quoting."""

from __future__ import annotations

import unittest

from fzfcd.encoder import (
    build_result_path,
    combine,
    encode_for_buffer,
    flag_safe_prefix,
    quote_result_path,
    shell_quote,
)
from fzfcd.parser import decode


class ShellQuoteTests(unittest.TestCase):
    def test_plain_names_are_unchanged(self) -> None:
        self.assertEqual(shell_quote("plain/dir-1_2.x/"), "plain/dir-1_2.x/")
        self.assertEqual(shell_quote("İSTANBUL/"), "İSTANBUL/")

    def test_special_characters_are_backslash_escaped(self) -> None:
        self.assertEqual(shell_quote("Has Space"), "Has\\ Space")
        self.assertEqual(shell_quote('Mixed "Quotes'), 'Mixed\\ \\"Quotes')
        self.assertEqual(shell_quote("$Money"), "\\$Money")
        self.assertEqual(shell_quote("Back\\Slash"), "Back\\\\Slash")

    def test_leading_tilde_and_hash_are_escaped(self) -> None:
        self.assertEqual(shell_quote("~x"), "\\~x")
        self.assertEqual(shell_quote("#x"), "\\#x")
        self.assertEqual(shell_quote("a~b#c"), "a~b#c")

    def test_control_characters_use_ansi_c_quoting(self) -> None:
        self.assertEqual(shell_quote("Dir\nName/"), "$'Dir\\nName/'")
        self.assertEqual(shell_quote("it's\there"), "$'it\\'s\\there'")

    def test_empty_string(self) -> None:
        self.assertEqual(shell_quote(""), "''")

    def test_quoted_output_decodes_back_to_original(self) -> None:
        names = [
            "Has Space",
            'My"Folder',
            "Mixed \"Quotes",
            "Back\\Slash",
            "Trailing Backslash\\",
            "Double\\\\Backslash",
            "01_NL_Newline\n",
            "02_CR_CarriageReturn\r",
            "03_CRNL_Windows\r\n",
            "Tab\tChar",
            " Leading Space",
            "Multiple  Spaces",
            "~tilde",
            "it's",
            "$HOME",
            "esc\x1bape",
            "",
        ]
        for name in names:
            self.assertEqual(decode(shell_quote(name)), name, msg=repr(name))


class CombineTests(unittest.TestCase):
    def test_combine_cases(self) -> None:
        cases = [
            (("loc", "local", "loc"), "local"),
            (("", "x", ""), "x"),
            (("./l", "local", "./l"), "local"),
            (("/u", "usr", "/u"), "/usr"),
            (("/", "bin", "/"), "/bin"),
            (("/usr/l", "local", "/usr/l"), "/usr/local"),
            (("/usr/", "local", "/usr/"), "/usr/local"),
            (("a/b/c", "cc", "a/b/c"), "a/b/cc"),
            (("/srv/u", "usr", "$PROJ/u"), "/srv/usr"),
            (("/r/x", "", "/r/x"), "/r"),
        ]
        for args, expected in cases:
            self.assertEqual(combine(*args), expected, msg=repr(args))

    def test_build_result_path_decodes_transport_and_appends_slash(self) -> None:
        self.assertEqual(build_result_path("/usr/l", "local", "/usr/l"), "/usr/local/")
        self.assertEqual(build_result_path("", "Dir\\nName", ""), "Dir\nName/")
        self.assertEqual(build_result_path("x/", "Back\\\\Slash", "x/"), "x/Back\\Slash/")


class TildeRestorationTests(unittest.TestCase):
    def test_home_itself_becomes_tilde_slash(self) -> None:
        self.assertEqual(quote_result_path("/home/u/", True, "/home/u"), "~/")
        self.assertEqual(quote_result_path("/home/u", True, "/home/u/"), "~/")

    def test_only_the_remainder_is_quoted(self) -> None:
        self.assertEqual(quote_result_path("/home/u/My Dir/", True, "/home/u"), "~/My\\ Dir/")
        self.assertEqual(quote_result_path("/home/u/../", True, "/home/u"), "~/../")

    def test_paths_outside_home_are_quoted_whole(self) -> None:
        self.assertEqual(quote_result_path("/srv/a b/", True, "/home/u"), "/srv/a\\ b/")
        self.assertEqual(quote_result_path("/home/u/x y/", False, "/home/u"), "/home/u/x\\ y/")


class FlagSafetyTests(unittest.TestCase):
    def test_dash_result_gets_argument_delimiter(self) -> None:
        self.assertEqual(flag_safe_prefix("cd ", "-oddname/", "cd"), "cd -- ")
        self.assertEqual(flag_safe_prefix("cd   ", "-x/", "cd"), "cd -- ")

    def test_existing_delimiter_and_plain_results_are_kept(self) -> None:
        self.assertEqual(flag_safe_prefix("cd -- ", "-x/", "cd"), "cd -- ")
        self.assertEqual(flag_safe_prefix("cd ", "plain/", "cd"), "cd ")

    def test_encode_for_buffer_builds_line(self) -> None:
        update = encode_for_buffer("-odd name/", "cd ", "cd", False, "/home/u")
        self.assertEqual(update.line, "cd -- -odd\\ name/")


if __name__ == "__main__":
    unittest.main()
