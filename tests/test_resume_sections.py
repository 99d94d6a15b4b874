import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.parsing.sections import match_section_header, split_resume_sections  # noqa: E402
from resume_fixtures import RESUME_HEADER, sample_resume_text  # noqa: E402

SECTION_KEYS = {"contact", "summary", "experience", "education", "skills", "projects", "certifications", "other"}


class SectionHeaderTests(unittest.TestCase):
    def test_known_headers_match_case_insensitively(self):
        cases = {
            "SKILLS": "skills",
            "Work   Experience:": "experience",
            "  professional summary : ": "summary",
            "Contact Information": "contact",
            "Licenses": "certifications",
            "Certification:": "certifications",
            "Project Experience": "projects",
            "Educational Background": "education",
        }
        for line, expected in cases.items():
            self.assertEqual(match_section_header(line), expected, line)

    def test_lines_that_only_mention_a_header_do_not_match(self):
        for line in ("Skills: Python, SQL", "Experienced engineer", "My Projects", "Education - Leeds", ""):
            self.assertIsNone(match_section_header(line), line)


class SplitResumeSectionsTests(unittest.TestCase):
    def test_lines_are_grouped_under_the_preceding_header(self):
        sections = split_resume_sections(RESUME_HEADER)
        self.assertEqual(set(sections), SECTION_KEYS)
        self.assertEqual(sections["other"], "Jane Doe\njane.doe@example.com | 555-123-4567 | Berlin")
        self.assertTrue(sections["summary"].startswith("Data scientist with six years"))
        self.assertEqual(len(sections["experience"].split("\n")), 5)
        self.assertEqual(sections["education"], "Bachelor of Science in Statistics, University of Leeds")
        self.assertEqual(sections["skills"], "Python, SQL, Pandas, Statistics, Data Visualization")
        self.assertEqual(sections["projects"], "")
        self.assertEqual(sections["certifications"], "")

    def test_header_lines_and_blank_lines_are_dropped(self):
        sections = split_resume_sections("Skills:\n\n   \nPython\n\nSQL  \nSKILLS\nDocker")
        self.assertEqual(sections["skills"], "Python\nSQL\nDocker")
        self.assertNotIn("Skills", "\n".join(sections.values()))

    def test_projects_section_of_sample_resume(self):
        projects = split_resume_sections(sample_resume_text())["projects"].split("\n")
        self.assertEqual(len(projects), 48)
        self.assertTrue(all(line.startswith("- ") for line in projects))

    def test_text_without_headers_lands_in_other(self):
        sections = split_resume_sections("Jane Doe\nBerlin")
        self.assertEqual(sections["other"], "Jane Doe\nBerlin")
        self.assertTrue(all(value == "" for key, value in sections.items() if key != "other"))

    def test_non_string_input_yields_empty_sections(self):
        for value in (None, 42, b"Skills\nPython", ["Skills"]):
            sections = split_resume_sections(value)
            self.assertEqual(set(sections), SECTION_KEYS)
            self.assertTrue(all(text == "" for text in sections.values()))


if __name__ == "__main__":
    unittest.main()
