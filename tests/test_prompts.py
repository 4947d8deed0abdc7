from __future__ import annotations

import unittest

from analysis_flow.mode import is_comparison_request, select_template_kind
from analysis_flow.prompt_builder import build_prompt
from dto.analysis import AnalysisRequest, TemplateKind
from dto.dataset import Dataset
from errors import ConfigurationError
from settings import Settings

_TRENDS_CSV = "date,rev\n2023-01,100\n2023-02,120\n"


def _request(question: str, *datasets: Dataset, file_name: str = "q1.csv") -> AnalysisRequest:
    primary = datasets[0] if datasets else Dataset(name=file_name, raw_text=_TRENDS_CSV)
    return AnalysisRequest(
        question=question,
        primary_dataset=primary,
        file_name=file_name,
        comparison_datasets=list(datasets) if len(datasets) > 1 else [],
    )


def _big_csv(rows: int) -> str:
    return "id,label,amount\n" + "".join(f"{i},item-{i:06d},{i * 3}\n" for i in range(rows))


class ModeSelectionTests(unittest.TestCase):
    def test_compare_with_several_datasets_is_comparison(self) -> None:
        for question in ["compare them", "Compare these two", "COMPARED to last year"]:
            self.assertEqual(TemplateKind.COMPARISON, select_template_kind(question, 2))
        self.assertTrue(is_comparison_request("please compare", 5))

    def test_compare_with_one_dataset_is_single(self) -> None:
        self.assertEqual(TemplateKind.SINGLE_ANALYSIS, select_template_kind("Compare Q1 and Q2", 1))
        self.assertEqual(TemplateKind.SINGLE_ANALYSIS, select_template_kind("Compare", 0))

    def test_other_phrasings_are_single(self) -> None:
        for question in ["what is the difference", "A versus B", "comparing revenue", "summarize trends", ""]:
            self.assertEqual(TemplateKind.SINGLE_ANALYSIS, select_template_kind(question, 3))

    def test_dataset_count_defaults_to_primary_only(self) -> None:
        self.assertEqual(1, _request("compare").dataset_count)


class SingleAnalysisPromptTests(unittest.TestCase):
    def test_prompt_carries_file_columns_rows_and_question(self) -> None:
        prompt = build_prompt(_request("summarize trends"), Settings())

        self.assertEqual(TemplateKind.SINGLE_ANALYSIS, prompt.template_kind)
        self.assertIn("FILE: q1.csv", prompt.text)
        self.assertIn("COLUMNS: date, rev", prompt.text)
        self.assertIn("2023-01,100", prompt.text)
        self.assertIn("2023-02,120", prompt.text)
        self.assertIn("QUESTION: summarize trends", prompt.text)
        self.assertIn("SIZE: 2 rows", prompt.text)
        self.assertNotIn("Key differences between datasets", prompt.text)
        self.assertNotIn("--- FILE", prompt.text)

    def test_missing_file_name_falls_back(self) -> None:
        request = _request("summarize trends", file_name="")
        self.assertIn("FILE: data.csv", build_prompt(request, Settings()).text)

    def test_v2_asks_for_optional_chart_block(self) -> None:
        text = build_prompt(_request("summarize trends"), Settings()).text
        self.assertIn("```chart", text)
        for chart_type in ("bar", "line", "pie", "area", "scatter", "radar"):
            self.assertIn(f'"{chart_type}"', text)

    def test_v1_has_no_chart_instructions(self) -> None:
        text = build_prompt(_request("summarize trends"), Settings(prompt_version="v1")).text
        self.assertNotIn("```chart", text)
        self.assertIn("QUESTION: summarize trends", text)

    def test_large_dataset_is_sampled_and_prompt_bounded(self) -> None:
        big = Dataset(name="big.csv", raw_text=_big_csv(5000))
        settings = Settings()
        text = build_prompt(_request("what stands out?", big, file_name="big.csv"), settings).text

        self.assertIn("SIZE: 5,000 total rows (showing sample)", text)
        self.assertIn("more rows omitted]", text)
        self.assertNotIn("4999,item-004999", text)
        self.assertLess(len(text), settings.max_chars + 4000)

    def test_unknown_prompt_version_is_configuration_error(self) -> None:
        with self.assertRaises(ConfigurationError):
            build_prompt(_request("summarize"), Settings(prompt_version="v9"))


class ComparisonPromptTests(unittest.TestCase):
    def test_prompt_lists_every_dataset(self) -> None:
        first = Dataset(name="2022.csv", raw_text="month,sales\nJan,10\nFeb,12\n")
        second = Dataset(name="2023.csv", raw_text="month,sales\nJan,15\nFeb,9\n")
        prompt = build_prompt(_request("Compare these two", first, second), Settings())

        self.assertEqual(TemplateKind.COMPARISON, prompt.template_kind)
        self.assertIn("--- FILE 1: 2022.csv (2 rows) ---", prompt.text)
        self.assertIn("--- FILE 2: 2023.csv (2 rows) ---", prompt.text)
        self.assertIn("Jan,10\nFeb,12", prompt.text)
        self.assertIn("Jan,15\nFeb,9", prompt.text)
        self.assertIn("QUESTION: Compare these two", prompt.text)
        self.assertIn("Key differences between datasets", prompt.text)
        self.assertIn("Recommendations", prompt.text)
        self.assertIn("```chart", prompt.text)

    def test_each_dataset_uses_the_smaller_budget(self) -> None:
        first = Dataset(name="a.csv", raw_text=_big_csv(1000))
        second = Dataset(name="b.csv", raw_text=_big_csv(1000))
        settings = Settings(max_chars=8000, comparison_max_chars=1000)
        text = build_prompt(_request("compare a and b", first, second), settings).text

        self.assertEqual(2, text.count("more rows omitted]"))
        self.assertEqual(2, text.count("(showing sample)"))
        self.assertLess(len(text), 2 * 1000 + 4000)

    def test_without_keyword_several_files_use_primary_only(self) -> None:
        first = Dataset(name="a.csv", raw_text="x,y\n1,2\n")
        second = Dataset(name="b.csv", raw_text="x,y\n3,4\n")
        prompt = build_prompt(_request("what is the max of y?", first, second, file_name="a.csv"), Settings())

        self.assertEqual(TemplateKind.SINGLE_ANALYSIS, prompt.template_kind)
        self.assertIn("1,2", prompt.text)
        self.assertNotIn("3,4", prompt.text)


if __name__ == "__main__":
    unittest.main()
