from __future__ import annotations

import unittest

from lazyhistory.paths import (
    breadcrumbs,
    display_name,
    is_strict_ancestor,
    normalize_separators,
    parent_directory,
)


class BreadcrumbTests(unittest.TestCase):
    def test_empty_and_dot_paths_yield_single_dot(self) -> None:
        self.assertEqual(breadcrumbs(""), ["."])
        self.assertEqual(breadcrumbs("."), ["."])

    def test_posix_path_keeps_root_marker(self) -> None:
        self.assertEqual(
            breadcrumbs("/home/user/project"),
            ["/", "/home", "/home/user", "/home/user/project"],
        )

    def test_windows_drive_is_first_crumb(self) -> None:
        self.assertEqual(breadcrumbs("C:\\Users\\dev"), ["C:", "C:/Users", "C:/Users/dev"])

    def test_relative_path(self) -> None:
        self.assertEqual(breadcrumbs("src/pkg"), ["src", "src/pkg"])

    def test_parent_of_last_crumb_is_prefix_of_crumbs(self) -> None:
        for path in ["/home/user/project", "C:\\Users\\dev\\repo", "src/pkg/mod", "/tmp"]:
            crumbs = breadcrumbs(path)
            parent_crumbs = breadcrumbs(parent_directory(crumbs[-1]))
            with self.subTest(path=path):
                self.assertEqual(crumbs[: len(parent_crumbs)], parent_crumbs)


class ParentDirectoryTests(unittest.TestCase):
    def test_roots_have_no_parent(self) -> None:
        for path in ["", ".", "/"]:
            with self.subTest(path=path):
                self.assertEqual(parent_directory(path), "")

    def test_top_level_posix_directory_parent_is_root(self) -> None:
        self.assertEqual(parent_directory("/home"), "/")

    def test_name_without_separator_parent_is_dot(self) -> None:
        self.assertEqual(parent_directory("project"), ".")

    def test_trailing_separator_is_ignored(self) -> None:
        self.assertEqual(parent_directory("/home/user/"), "/home")

    def test_backslashes_are_normalized(self) -> None:
        self.assertEqual(parent_directory("C:\\Users\\dev"), "C:/Users")


class AncestorTests(unittest.TestCase):
    def test_strict_ancestor_excludes_equal_path(self) -> None:
        self.assertTrue(is_strict_ancestor("/home", "/home/user"))
        self.assertFalse(is_strict_ancestor("/home/user", "/home/user"))

    def test_partial_component_is_not_ancestor(self) -> None:
        self.assertFalse(is_strict_ancestor("/home/us", "/home/user"))

    def test_root_is_ancestor_of_absolute_paths(self) -> None:
        self.assertTrue(is_strict_ancestor("/", "/home"))
        self.assertFalse(is_strict_ancestor("/", "relative/dir"))

    def test_windows_paths_compare_normalized(self) -> None:
        self.assertTrue(is_strict_ancestor("C:\\Users", "C:/Users/dev"))

    def test_empty_paths_are_never_ancestors(self) -> None:
        self.assertFalse(is_strict_ancestor("", "/home"))
        self.assertFalse(is_strict_ancestor("/home", ""))


class DisplayNameTests(unittest.TestCase):
    def test_last_component(self) -> None:
        self.assertEqual(display_name("/home/user/project"), "project")
        self.assertEqual(display_name("C:\\Users\\dev"), "dev")

    def test_roots(self) -> None:
        self.assertEqual(display_name("/"), "/")
        self.assertEqual(display_name(""), ".")

    def test_normalize_separators(self) -> None:
        self.assertEqual(normalize_separators("a\\b/c"), "a/b/c")


if __name__ == "__main__":
    unittest.main()
