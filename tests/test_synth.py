import json

import pandas as pd
import pytest

from config import Settings
from core.models import RecordCategory
from core.projection import compute_projection
from core.records import RecordSet
from data.synth import generate_sample_records, write_seed_file

TODAY = pd.Timestamp("2025-06-15")


def test_generator_is_deterministic_with_seed():
    first = generate_sample_records(TODAY, seed=7)
    second = generate_sample_records(TODAY, seed=7)

    assert first == second


def test_generator_covers_every_category():
    records = generate_sample_records(TODAY, seed=3)

    assert set(records) == {category.value for category in RecordCategory}
    assert all(records[category.value] for category in RecordCategory)
    kinds = {row["transaction_type"] for row in records[RecordCategory.CAPITAL_TRANSACTION.value]}
    assert kinds == {"buy", "sale"}


def test_generated_records_feed_a_projection():
    records = RecordSet.from_mapping(generate_sample_records(TODAY, seed=11))
    context = Settings(opening_balance=75000.0).build_context(today=TODAY)

    result = compute_projection(records, context)

    assert result.events
    assert result.balance.final_balance == pytest.approx(result.monthly.closing_balance)
    assert result.minimum_balance <= context.opening_balance


def test_write_seed_file_round_trips_json(tmp_path):
    target = tmp_path / "nested" / "seed.json"

    written = write_seed_file(target, seed=5, today=TODAY)

    assert json.loads(target.read_text(encoding="utf-8")) == written
