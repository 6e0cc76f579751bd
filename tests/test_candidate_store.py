import json
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from screener.schemas.candidate import CandidateRecord, FitAssessment  # noqa: E402
from screener.store.candidates import (  # noqa: E402
    CandidateStore,
    CandidateStoreError,
    candidate_item,
    deserialize_image,
)


class RecordingDynamo:
    def __init__(self):
        self.puts = []
        self.updates = []

    def put_item(self, **kwargs):
        self.puts.append(kwargs)
        return {}

    def update_item(self, **kwargs):
        self.updates.append(kwargs)
        return {}


def _record(**overrides):
    values = {
        "candidate_id": "c-1",
        "bucket": "uploads",
        "file_key": "cv/jane doe.pdf",
        "raw_text": "Jane Doe\nPython",
    }
    values.update(overrides)
    return CandidateRecord(**values)


class CandidateItemTests(unittest.TestCase):
    def test_optional_fields_are_omitted_when_absent(self):
        item = candidate_item(_record())
        self.assertEqual(
            item,
            {
                "candidateId": {"S": "c-1"},
                "bucket": {"S": "uploads"},
                "fileKey": {"S": "cv/jane doe.pdf"},
                "rawText": {"S": "Jane Doe\nPython"},
            },
        )

    def test_populated_fields_are_typed(self):
        item = candidate_item(
            _record(name="Jane Doe", email="jane@example.com", phone="+1 555 222 1111", skills=["Python", "AWS"])
        )
        self.assertEqual(item["name"], {"S": "Jane Doe"})
        self.assertEqual(item["email"], {"S": "jane@example.com"})
        self.assertEqual(item["phone"], {"S": "+1 555 222 1111"})
        self.assertEqual(item["skills"], {"SS": ["AWS", "Python"]})

    def test_record_skills_are_unique_and_sorted(self):
        self.assertEqual(_record(skills=["SQL", "AWS", "SQL"]).skills, ["AWS", "SQL"])


class DeserializeImageTests(unittest.TestCase):
    def test_stream_image_becomes_plain_values(self):
        image = {
            "candidateId": {"S": "c-1"},
            "skills": {"SS": ["AWS"]},
            "aiFit": {"S": "{}"},
        }
        self.assertEqual(
            deserialize_image(image),
            {"candidateId": "c-1", "skills": {"AWS"}, "aiFit": "{}"},
        )
        self.assertEqual(deserialize_image(None), {})


class CandidateStoreTests(unittest.IsolatedAsyncioTestCase):
    async def test_put_candidate_writes_one_item(self):
        client = RecordingDynamo()
        store = CandidateStore(client, "Candidates")

        await store.put_candidate(_record(name="Jane Doe"))

        self.assertEqual(len(client.puts), 1)
        self.assertEqual(client.puts[0]["TableName"], "Candidates")
        self.assertEqual(client.puts[0]["Item"]["name"], {"S": "Jane Doe"})

    async def test_update_fit_sets_serialized_assessment(self):
        client = RecordingDynamo()
        store = CandidateStore(client, "Candidates")
        fit = FitAssessment.fallback("plain text")

        await store.update_fit("c-1", fit)

        call = client.updates[0]
        self.assertEqual(call["Key"], {"candidateId": {"S": "c-1"}})
        self.assertEqual(call["UpdateExpression"], "SET aiFit = :fit")
        stored = json.loads(call["ExpressionAttributeValues"][":fit"]["S"])
        self.assertIsNone(stored["fitScore"])
        self.assertEqual(stored["summary"], "plain text")
        self.assertEqual(stored["recommendedLevel"], "Unknown")

    async def test_missing_table_name_raises(self):
        store = CandidateStore(RecordingDynamo(), None)
        with self.assertRaises(CandidateStoreError):
            await store.put_candidate(_record())


if __name__ == "__main__":
    unittest.main()
