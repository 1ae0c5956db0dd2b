import unittest
from pathlib import Path

from _support import make_file, make_repo_tmpdir
from lsgrid.core.file_name import FILE_TYPE_ICONS, icon_for_file, style_role_for_file
from lsgrid.core.files import FileRecord
from lsgrid.core.filetype import FileType, get_file_type, has_source_sibling


def _type(name):
    return get_file_type(make_file(name))


class FileTypeTests(unittest.TestCase):
    def test_extensions_are_case_insensitive(self):
        self.assertEqual(_type("photo.PNG"), FileType.IMAGE)
        self.assertEqual(_type("clip.mkv"), FileType.VIDEO)
        self.assertEqual(_type("song.flac"), FileType.LOSSLESS)
        self.assertEqual(_type("archive.tar.gz"), FileType.COMPRESSED)
        self.assertEqual(_type("main.py"), FileType.SOURCE)
        self.assertEqual(_type("module.pyc"), FileType.COMPILED)

    def test_whole_names(self):
        self.assertEqual(_type("Makefile"), FileType.BUILD)
        self.assertEqual(_type("README.md"), FileType.BUILD)
        self.assertEqual(_type("id_ed25519"), FileType.CRYPTO)

    def test_temporary_files(self):
        self.assertEqual(_type("notes.txt~"), FileType.TEMP)
        self.assertEqual(_type("#draft#"), FileType.TEMP)
        self.assertEqual(_type("data.bak"), FileType.TEMP)

    def test_unknown(self):
        self.assertIsNone(_type("notes"))
        self.assertIsNone(_type("trailing."))
        self.assertIsNone(_type("#"))


class SourceSiblingTests(unittest.TestCase):
    def setUp(self):
        self._tmp = make_repo_tmpdir()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)

    def _record(self, *names):
        for name in names:
            (self.root / name).write_text("", encoding="utf-8")
        return FileRecord.from_path(str(self.root / names[0]))

    def test_output_next_to_its_source_is_compiled(self):
        self.assertEqual(get_file_type(self._record("app.js", "app.ts")), FileType.COMPILED)
        self.assertEqual(get_file_type(self._record("Main.hi", "Main.hs")), FileType.COMPILED)

    def test_output_without_source_keeps_its_extension_type(self):
        self.assertEqual(get_file_type(self._record("lib.js")), FileType.SOURCE)
        self.assertIsNone(get_file_type(self._record("Other.hi")))
        self.assertFalse(has_source_sibling(self._record("app.ts")))

    def test_named_by_path_outside_the_directory(self):
        self._record("tool.js", "tool.coffee")
        record = FileRecord.from_path(str(self.root / "tool.js"), name=str(self.root / "tool.js"))
        self.assertTrue(has_source_sibling(record))

    def test_directories_are_never_compiled(self):
        (self.root / "pkg.js").mkdir()
        (self.root / "pkg.ts").write_text("", encoding="utf-8")
        self.assertFalse(has_source_sibling(FileRecord.from_path(str(self.root / "pkg.js"))))

    def test_name_colour_and_icon_follow(self):
        record = self._record("app.js", "app.ts")
        self.assertEqual(style_role_for_file(record), "compiled")
        self.assertEqual(icon_for_file(record), FILE_TYPE_ICONS[FileType.COMPILED])


if __name__ == '__main__':
    unittest.main()
