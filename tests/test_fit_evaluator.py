import json
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from screener.ai.types import GenerationParams  # noqa: E402
from screener.services.fit_evaluator import (  # noqa: E402
    RoleFitEvaluator,
    build_fit_prompt,
    parse_fit_assessment,
    strip_code_fences,
)

VALID_FIT = {
    "fitScore": 82,
    "summary": "Strong backend profile.",
    "keyStrengths": ["Python", "AWS"],
    "concerns": ["No Kubernetes"],
    "skillsMatched": ["Python"],
    "skillsMissing": ["Kubernetes"],
    "recommendedLevel": "Senior",
}


class CannedModel:
    def __init__(self, output):
        self.output = output
        self.calls = []

    async def generate(self, prompt, params):
        self.calls.append((prompt, params))
        return self.output


class PromptTests(unittest.TestCase):
    def test_prompt_embeds_role_resume_and_schema(self):
        prompt = build_fit_prompt("Jane Doe\nPython", "Backend Engineer")
        self.assertIn("ROLE DESCRIPTION:\nBackend Engineer", prompt)
        self.assertIn("RESUME TEXT:\nJane Doe\nPython", prompt)
        self.assertIn('"fitScore": number between 0 and 100', prompt)
        self.assertIn("ONLY a single line of valid JSON", prompt)

    def test_braces_in_resume_are_left_alone(self):
        prompt = build_fit_prompt("uses {curly} templates", "Role")
        self.assertIn("uses {curly} templates", prompt)


class ParsingTests(unittest.TestCase):
    def test_fenced_json_parses_like_plain_json(self):
        raw = json.dumps(VALID_FIT)
        fenced = f"```json\n{raw}\n```"
        self.assertEqual(parse_fit_assessment(fenced), parse_fit_assessment(raw))
        self.assertEqual(parse_fit_assessment(f"```{raw}```").fit_score, 82)

    def test_strip_code_fences_only_when_leading(self):
        self.assertEqual(strip_code_fences("  ```JSON {} ```  "), "{}")
        self.assertEqual(strip_code_fences("note ```x```"), "note ```x```")

    def test_valid_json_maps_fields(self):
        fit = parse_fit_assessment(json.dumps(VALID_FIT))
        self.assertEqual(fit.fit_score, 82)
        self.assertEqual(fit.key_strengths, ["Python", "AWS"])
        self.assertEqual(fit.skills_missing, ["Kubernetes"])
        self.assertEqual(fit.recommended_level, "Senior")

    def test_prose_becomes_degraded_assessment(self):
        prose = "The candidate seems like a decent fit for the role."
        fit = parse_fit_assessment(prose)
        self.assertIsNone(fit.fit_score)
        self.assertEqual(fit.summary, prose)
        self.assertEqual(fit.key_strengths, [])
        self.assertEqual(fit.concerns, [])
        self.assertEqual(fit.skills_matched, [])
        self.assertEqual(fit.skills_missing, [])
        self.assertEqual(fit.recommended_level, "Unknown")

    def test_schema_violations_fall_back(self):
        out_of_range = dict(VALID_FIT, fitScore=150)
        self.assertIsNone(parse_fit_assessment(json.dumps(out_of_range)).fit_score)
        self.assertEqual(parse_fit_assessment("[1, 2]").recommended_level, "Unknown")
        self.assertEqual(parse_fit_assessment("{}").summary, "{}")

    def test_serialized_form_uses_prompt_keys(self):
        payload = json.loads(parse_fit_assessment(json.dumps(VALID_FIT)).to_json())
        self.assertEqual(payload, VALID_FIT)

    def test_whole_scores_serialize_as_integers(self):
        self.assertIn('"fitScore":82,', parse_fit_assessment(json.dumps(VALID_FIT)).to_json())
        halves = parse_fit_assessment(json.dumps(dict(VALID_FIT, fitScore=82.5)))
        self.assertEqual(halves.fit_score, 82.5)


class EvaluatorTests(unittest.IsolatedAsyncioTestCase):
    async def test_evaluate_passes_generation_limits(self):
        model = CannedModel(json.dumps(VALID_FIT))
        evaluator = RoleFitEvaluator(model)

        fit = await evaluator.evaluate("resume body", "Data Engineer")

        self.assertEqual(fit.fit_score, 82)
        prompt, params = model.calls[0]
        self.assertIn("Data Engineer", prompt)
        self.assertEqual(params, GenerationParams(max_tokens=512, temperature=0.2, top_p=0.9))

    async def test_evaluate_never_raises_on_malformed_output(self):
        evaluator = RoleFitEvaluator(CannedModel("```\nnot json at all\n```"))
        fit = await evaluator.evaluate("resume body", "Data Engineer")
        self.assertEqual(fit.summary, "not json at all")
        self.assertEqual(fit.recommended_level, "Unknown")


if __name__ == "__main__":
    unittest.main()
