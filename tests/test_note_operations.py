import unittest
from datetime import date, datetime
from pathlib import Path
from tempfile import TemporaryDirectory

from journal_vault import (
    NoteIOError,
    Representation,
    VaultConfiguration,
    add_note,
    add_notes,
    list_notes,
    note_path_for,
)
from journal_vault.core.entry_format import remove_table_gaps
from journal_vault.data_models import TableHeaders

DAY = date(2025, 3, 5)


def at(hour: int, minute: int = 0, second: int = 0) -> datetime:
    return datetime(2025, 3, 5, hour, minute, second)


class NoteOperationTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = TemporaryDirectory()
        self.vault_path = Path(self.tmpdir.name).resolve()

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def _vault(self, **settings) -> VaultConfiguration:
        return VaultConfiguration(name="test", path=self.vault_path, **settings)

    def _note_path(self) -> Path:
        return self.vault_path / "2025-03-05.md"

    def _write_note(self, content: str) -> Path:
        note_path = self._note_path()
        note_path.write_text(content, encoding="utf-8")
        return note_path

    def _read_note(self) -> str:
        return self._note_path().read_text(encoding="utf-8")


class AddNoteCreationTests(NoteOperationTestCase):
    def test_creates_default_bullet_document(self) -> None:
        result = add_note(self._vault(), "Coffee", at(9))
        self.assertEqual(result["status"], "created")
        self.assertEqual(result["note"], "2025-03-05")
        self.assertEqual(self._read_note(), "---\ndate: 2025-03-05\n---\n\n- 09:00:00 Coffee\n")

    def test_creates_document_with_section_heading(self) -> None:
        add_note(self._vault(section_header="Notes"), "Coffee", at(9))
        self.assertEqual(
            self._read_note(),
            "---\ndate: 2025-03-05\n---\n\n# Notes\n\n- 09:00:00 Coffee\n",
        )

    def test_creates_default_table_document(self) -> None:
        add_note(self._vault(representation=Representation.TABLE), "Coffee", at(9))
        self.assertEqual(
            self._read_note(),
            "---\ndate: 2025-03-05\n---\n\n| Time | Note |\n|------|----------|\n| 09:00:00 | Coffee |\n",
        )

    def test_phrases_are_expanded(self) -> None:
        vault = self._vault(phrases={"@work": "Working", "@workout": "Gym"})
        result = add_note(vault, "Did @workout today", at(18))
        self.assertEqual(result["entry"], "- 18:00:00 Did Gym today")
        self.assertIn("- 18:00:00 Did Gym today\n", self._read_note())

    def test_nested_custom_path_creates_parent_directories(self) -> None:
        vault = self._vault(file_path_format="{year}/{month:02}/{day:02}")
        add_note(vault, "first", at(9))
        add_note(vault, "second", at(10))
        note_path = self.vault_path / "2025" / "03" / "05.md"
        self.assertTrue(note_path.is_file())
        self.assertEqual(list_notes(vault, DAY), ["- 09:00:00 first", "- 10:00:00 second"])

    def test_missing_vault_directory_is_created(self) -> None:
        vault = VaultConfiguration(name="fresh", path=self.vault_path / "new-vault")
        add_note(vault, "hello", at(9))
        self.assertTrue((self.vault_path / "new-vault" / "2025-03-05.md").is_file())


class AddNoteTemplateTests(NoteOperationTestCase):
    def _template(self, content: str) -> Path:
        template_path = self.vault_path / "templates" / "daily.md"
        template_path.parent.mkdir(parents=True, exist_ok=True)
        template_path.write_text(content, encoding="utf-8")
        return template_path

    def test_template_tokens_are_expanded(self) -> None:
        template = self._template(
            "---\ncreated: {created}\n---\n\n[[{yesterday}]] [[{tomorrow}]]\n\n"
            "## {today} {weekday} ({Weekday})\n\n{{note}}\n"
        )
        vault = self._vault(template_file=template)
        add_note(vault, "Test note content", datetime(2025, 1, 15, 14, 30))

        content = (self.vault_path / "2025-01-15.md").read_text(encoding="utf-8")
        self.assertEqual(
            content,
            "---\ncreated: 2025-01-15 14:30:00\n---\n\n[[2025-01-14]] [[2025-01-16]]\n\n"
            "## 2025-01-15 Wednesday (Wed)\n\n- 14:30:00 Test note content\n",
        )

    def test_time_date_and_section_tokens(self) -> None:
        template = self._template("{{date}} {time} {datetime}\n# {{section_header}}\n")
        vault = self._vault(template_file=template, section_header="Log")
        add_note(vault, "entry", at(7, 8, 9))
        self.assertEqual(
            self._read_note(),
            "2025-03-05 07:08:09 2025-03-05T07:08:09\n# Log\n- 07:08:09 entry\n",
        )

    def test_entry_is_appended_without_note_token(self) -> None:
        template = self._template("# Daily {date}")
        add_note(self._vault(template_file=template), "entry", at(9))
        self.assertEqual(self._read_note(), "# Daily 2025-03-05\n- 09:00:00 entry\n")

    def test_table_template_receives_header_block(self) -> None:
        template = self._template("# {Weekday}\n\n{note}\n")
        add_note(self._vault(template_file=template, representation="table"), "entry", at(9))
        self.assertEqual(
            self._read_note(),
            "# Wed\n\n| Time | Note |\n|------|----------|\n| 09:00:00 | entry |\n",
        )

    def test_template_is_only_used_for_new_files(self) -> None:
        template = self._template("TEMPLATE {note}\n")
        vault = self._vault(template_file=template)
        add_note(vault, "first", at(9))
        add_note(vault, "second", at(10))
        self.assertEqual(self._read_note(), "TEMPLATE - 09:00:00 first\n- 10:00:00 second\n")

    def test_missing_template_aborts_without_writing(self) -> None:
        missing = self.vault_path / "templates" / "missing.md"
        with self.assertRaises(NoteIOError) as ctx:
            add_note(self._vault(template_file=missing), "entry", at(9))
        self.assertIn(str(missing), str(ctx.exception))
        self.assertEqual(ctx.exception.path, missing)
        self.assertFalse(self._note_path().exists())


class AddNoteUpdateTests(NoteOperationTestCase):
    def test_appends_to_existing_section(self) -> None:
        vault = self._vault(section_header="Notes")
        add_note(vault, "Coffee", at(9))
        add_note(vault, "Emails", at(10))
        self.assertEqual(
            self._read_note(),
            "---\ndate: 2025-03-05\n---\n\n# Notes\n\n- 09:00:00 Coffee\n- 10:00:00 Emails\n",
        )

    def test_inserts_at_section_content_end_before_next_heading(self) -> None:
        self._write_note("# Notes\n\n- 09:00:00 a\n\n# Other\n\nText\n")
        add_note(self._vault(section_header="Notes"), "b", at(10))
        self.assertEqual(self._read_note(), "# Notes\n\n- 09:00:00 a\n- 10:00:00 b\n\n# Other\n\nText\n")

    def test_missing_section_is_created_at_end_of_file(self) -> None:
        self._write_note("---\ndate: 2025-03-05\n---\n\n- 09:00:00 a\n")
        add_note(self._vault(section_header="Work"), "b", at(10))
        self.assertEqual(
            self._read_note(),
            "---\ndate: 2025-03-05\n---\n\n- 09:00:00 a\n\n# Work\n\n- 10:00:00 b\n",
        )

    def test_category_override_selects_section(self) -> None:
        vault = self._vault(section_header="Notes", section_headers={"work": "Work Log"})
        add_note(vault, "standup", at(9), category="work")
        add_note(vault, "lunch", at(12))
        add_note(vault, "review", at(15), category="work")
        self.assertEqual(
            self._read_note(),
            "---\ndate: 2025-03-05\n---\n\n# Work Log\n\n- 09:00:00 standup\n- 15:00:00 review\n"
            "\n# Notes\n\n- 12:00:00 lunch\n",
        )
        self.assertEqual(list_notes(vault, DAY, "work"), ["- 09:00:00 standup", "- 15:00:00 review"])
        self.assertEqual(list_notes(vault, DAY), ["- 12:00:00 lunch"])

    def test_unknown_category_uses_default_header(self) -> None:
        vault = self._vault(section_header="Notes", section_headers={"work": "Work Log"})
        add_note(vault, "x", at(9), category="hobby")
        self.assertIn("# Notes\n", self._read_note())

    def test_previously_written_rows_are_unchanged(self) -> None:
        vault = self._vault()
        add_note(vault, "one", at(9))
        before = self._read_note()
        add_note(vault, "two", at(10))
        after = self._read_note()
        self.assertTrue(after.startswith(before))
        self.assertEqual(after[len(before):], "- 10:00:00 two\n")

    def test_bullet_file_is_converted_to_table(self) -> None:
        self._write_note("---\ndate: 2025-03-05\n---\n\n- 09:00:00 Coffee\n\n- [10:00:00] Emails\n")
        add_note(self._vault(representation=Representation.TABLE), "Lunch", at(11))
        self.assertEqual(
            self._read_note(),
            "---\ndate: 2025-03-05\n---\n\n| Time | Note |\n|------|----------|\n"
            "| 09:00:00 | Coffee |\n| 10:00:00 | Emails |\n| 11:00:00 | Lunch |\n",
        )

    def test_table_file_is_converted_to_bullets(self) -> None:
        self._write_note("# Notes\n\n| Time | Note |\n|------|----------|\n| 09:00:00 | Coffee |\n")
        add_note(self._vault(section_header="Notes"), "Emails", at(10))
        self.assertEqual(self._read_note(), "# Notes\n\n- 09:00:00 Coffee\n- 10:00:00 Emails\n")

    def test_mixed_file_is_left_as_is(self) -> None:
        self._write_note("- 09:00:00 a\n| 10:00:00 | b |\n")
        add_note(self._vault(), "c", at(11))
        self.assertEqual(self._read_note(), "- 09:00:00 a\n| 10:00:00 | b |\n- 11:00:00 c\n")

    def test_table_rows_stay_contiguous(self) -> None:
        vault = self._vault(representation=Representation.TABLE, section_header="Log")
        self._write_note("# Log\n\n| Time | Note |\n|------|----------|\n| 08:00:00 | a |\n\n\n# Later\n")
        for hour in range(9, 14):
            add_note(vault, f"entry {hour}", at(hour))
            lines = self._read_note().splitlines()
            self.assertEqual(remove_table_gaps(lines), lines)
        self.assertEqual(
            self._read_note(),
            "# Log\n\n| Time | Note |\n|------|----------|\n| 08:00:00 | a |\n| 09:00:00 | entry 9 |\n"
            "| 10:00:00 | entry 10 |\n| 11:00:00 | entry 11 |\n| 12:00:00 | entry 12 |\n"
            "| 13:00:00 | entry 13 |\n\n\n# Later\n",
        )

    def test_table_gap_from_manual_edit_is_closed(self) -> None:
        self._write_note("| Time | Note |\n|------|----------|\n| 09:00:00 | a |\n\n| 10:00:00 | b |\n\n")
        add_note(self._vault(representation=Representation.TABLE), "c", at(11))
        self.assertEqual(
            self._read_note(),
            "| Time | Note |\n|------|----------|\n| 09:00:00 | a |\n| 10:00:00 | b |\n| 11:00:00 | c |\n\n",
        )

    def test_table_section_without_table_gets_header(self) -> None:
        self._write_note("# Log\n\nSome intro\n\n# Other\n")
        add_note(self._vault(representation=Representation.TABLE, section_header="Log"), "a", at(9))
        self.assertEqual(
            self._read_note(),
            "# Log\n\nSome intro\n\n| Time | Note |\n|------|----------|\n| 09:00:00 | a |\n\n# Other\n",
        )

    def test_new_table_section_is_created_with_header(self) -> None:
        self._write_note("---\ndate: 2025-03-05\n---\n")
        add_note(self._vault(representation=Representation.TABLE, section_header="Log"), "a", at(9))
        self.assertEqual(
            self._read_note(),
            "---\ndate: 2025-03-05\n---\n\n# Log\n\n| Time | Note |\n|------|----------|\n| 09:00:00 | a |\n",
        )


class UserContentPreservationTests(NoteOperationTestCase):
    SHOPPING = "| Item | Qty |\n|---|---|\n| Apples | 3 |\n"

    def test_other_table_survives_conversion_to_bullets(self) -> None:
        self._write_note(
            "| Time | Note |\n|------|----------|\n| 09:00:00 | a |\n\n## Shopping\n\n" + self.SHOPPING
        )
        add_note(self._vault(), "b", at(10))
        self.assertEqual(
            self._read_note(),
            "- 09:00:00 a\n\n## Shopping\n\n" + self.SHOPPING + "- 10:00:00 b\n",
        )

    def test_table_entry_is_not_placed_inside_other_table(self) -> None:
        self._write_note("| Time | Note |\n|------|----------|\n| 09:00:00 | a |\n\n" + self.SHOPPING)
        add_note(self._vault(representation=Representation.TABLE), "b", at(10))
        self.assertEqual(
            self._read_note(),
            "| Time | Note |\n|------|----------|\n| 09:00:00 | a |\n| 10:00:00 | b |\n\n" + self.SHOPPING,
        )

    def test_section_holding_only_other_table_gets_entry_table(self) -> None:
        self._write_note("# Log\n\n" + self.SHOPPING)
        add_note(self._vault(representation=Representation.TABLE, section_header="Log"), "a", at(9))
        self.assertEqual(
            self._read_note(),
            "# Log\n\n" + self.SHOPPING + "\n| Time | Note |\n|------|----------|\n| 09:00:00 | a |\n",
        )

    def test_unencodable_content_leaves_existing_file_untouched(self) -> None:
        self._write_note("- 09:00:00 a\n")
        with self.assertRaises(NoteIOError) as ctx:
            add_note(self._vault(), "bad \ud800", at(10))
        self.assertEqual(ctx.exception.path, self._note_path())
        self.assertEqual(self._read_note(), "- 09:00:00 a\n")

    def test_unencodable_content_creates_no_file(self) -> None:
        with self.assertRaises(NoteIOError):
            add_note(self._vault(), "bad \ud800", at(10))
        self.assertFalse(self._note_path().exists())

    def test_crlf_line_endings_are_kept(self) -> None:
        original = b"---\r\ndate: 2025-03-05\r\n---\r\n\r\n# Notes\r\n\r\n- 09:00:00 a\r\n"
        self._note_path().write_bytes(original)
        vault = self._vault(section_header="Notes")

        add_note(vault, "b", at(10))

        self.assertEqual(self._note_path().read_bytes(), original + b"- 10:00:00 b\r\n")
        self.assertEqual(list_notes(vault, DAY), ["- 09:00:00 a", "- 10:00:00 b"])


class ListNotesTests(NoteOperationTestCase):
    def test_missing_file_returns_empty_list(self) -> None:
        self.assertEqual(list_notes(self._vault(), DAY), [])

    def test_lists_bullet_and_legacy_rows(self) -> None:
        self._write_note("---\ndate: 2025-03-05\n---\n\n- [08:00:00] legacy\n- 09:00:00 a\n- plain bullet\n")
        self.assertEqual(list_notes(self._vault(), DAY), ["- [08:00:00] legacy", "- 09:00:00 a"])

    def test_excludes_table_header_and_separator(self) -> None:
        self._write_note("| Time | Note |\n|------|----------|\n| 09:00:00 | a |\n")
        self.assertEqual(list_notes(self._vault(representation="table"), DAY), ["| 09:00:00 | a |"])

    def test_excludes_headers_from_other_locales(self) -> None:
        self._write_note("| Time | Note |\n|------|----------|\n| 09:00:00 | a |\n")
        vault = self._vault(representation="table", table_headers=TableHeaders(time="Tid", content="Notat"))
        self.assertEqual(list_notes(vault, DAY), ["| 09:00:00 | a |"])

    def test_excludes_rows_whose_content_is_a_header_label(self) -> None:
        self._write_note("| 00:00:00 | Notat |\n| 09:00:00 | a |\n")
        self.assertEqual(list_notes(self._vault(locale="nb-NO"), DAY), ["| 09:00:00 | a |"])

    def test_section_scoped_listing(self) -> None:
        self._write_note(
            "# Notes\n\n| Time | Note |\n|------|----------|\n| 09:00:00 | a |\n| 10:00:00 | b |\n\n"
            "# Work\n\n- 11:00:00 c\n"
        )
        vault = self._vault(section_header="Notes")
        self.assertEqual(list_notes(vault, DAY), ["| 09:00:00 | a |", "| 10:00:00 | b |"])
        self.assertEqual(list_notes(self._vault(section_header="Work"), DAY), ["- 11:00:00 c"])

    def test_missing_section_returns_empty_list(self) -> None:
        self._write_note("- 09:00:00 a\n")
        self.assertEqual(list_notes(self._vault(section_header="Work"), DAY), [])

    def test_listing_never_rewrites_the_file(self) -> None:
        original = "- 09:00:00 a\n\n| 10:00:00 | b |\n"
        self._write_note(original)
        list_notes(self._vault(representation="table"), DAY)
        self.assertEqual(self._read_note(), original)


class BatchAndPathTests(NoteOperationTestCase):
    def test_add_notes_skips_blank_lines(self) -> None:
        result = add_notes(self._vault(), ["first", "", "   ", "  second  "], at(9))
        self.assertEqual(result["count"], 2)
        self.assertEqual(list_notes(self._vault(), DAY), ["- 09:00:00 first", "- 09:00:00 second"])

    def test_add_notes_with_no_content(self) -> None:
        result = add_notes(self._vault(), ["", " "], at(9))
        self.assertEqual(result["count"], 0)
        self.assertEqual(result["status"], "empty")
        self.assertFalse(self._note_path().exists())

    def test_note_path_for_reports_existence(self) -> None:
        vault = self._vault()
        self.assertFalse(note_path_for(vault, DAY)["exists"])
        add_note(vault, "x", at(9))
        info = note_path_for(vault, DAY)
        self.assertTrue(info["exists"])
        self.assertEqual(info["path"], str(self._note_path()))


if __name__ == "__main__":
    unittest.main()
