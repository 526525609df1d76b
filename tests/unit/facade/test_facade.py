from __future__ import annotations

from ummah_speaks import UmmahSpeaks
from ummah_speaks.labels import Label
from ummah_speaks.storage.memory import InMemoryStorage


async def test_reflect_records_journal_entry(fake_llm, fake_source, make_passage) -> None:
    llm = fake_llm("Gratitude", "Bilal, your thanks is already worship. Keep it close.")
    app = UmmahSpeaks(
        InMemoryStorage(),
        llm,
        fake_source({"bukhari": [make_passage(200)]}),
        reveal_interval=0,
    )

    run = await app.reflect("so thankful for my family", name="Bilal")

    assert run.is_complete
    assert run.label is Label.GRATITUDE
    entries = app.journal_entries()
    assert len(entries) == 1
    assert entries[0].label == "Gratitude"
    assert entries[0].date_label.endswith(" AH")

    app.clear_journal()
    assert app.journal_entries() == []


async def test_journal_limit(fake_llm, fake_source, make_passage) -> None:
    llm = fake_llm("Hope", "One.", "Hope", "Two.")
    app = UmmahSpeaks(
        InMemoryStorage(),
        llm,
        fake_source({"bukhari": [make_passage()]}),
        reveal_interval=0,
    )

    await app.reflect("first")
    await app.reflect("second")

    assert [e.feeling for e in app.journal_entries(limit=1)] == ["second"]


def test_from_config_builds_pipeline() -> None:
    app = UmmahSpeaks.from_config({"llm": {"api_key": "gsk_test"}}, reveal_interval=0)

    assert app.journal_entries() == []
    assert not app.pipeline.busy
    assert app.reset().status.value == "idle"
