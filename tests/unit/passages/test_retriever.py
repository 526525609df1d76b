from __future__ import annotations

import pytest

from ummah_speaks.exceptions import PassageNotFoundError, PassageRetrievalError
from ummah_speaks.labels import Label
from ummah_speaks.passages.retriever import PassageRetriever, select_passage


class TestSelectPassage:
    def test_prefers_shortest_over_eighty_chars(self, make_passage) -> None:
        candidates = [
            make_passage(300),
            make_passage(20),
            make_passage(95),
            make_passage(81),
            make_passage(200),
        ]
        chosen = select_passage(candidates)
        assert chosen is not None
        assert len(chosen.text) == 81

    def test_exactly_eighty_is_not_preferred(self, make_passage) -> None:
        chosen = select_passage([make_passage(80), make_passage(150)])
        assert chosen is not None
        assert len(chosen.text) == 150

    def test_falls_back_to_shortest_when_none_qualify(self, make_passage) -> None:
        chosen = select_passage([make_passage(60), make_passage(12), make_passage(80)])
        assert chosen is not None
        assert len(chosen.text) == 12

    def test_ignores_empty_bodies(self, make_passage) -> None:
        chosen = select_passage([make_passage(text="   "), make_passage(30)])
        assert chosen is not None
        assert len(chosen.text) == 30

    def test_length_ignores_surrounding_whitespace(self, make_passage) -> None:
        padded = make_passage(text="x" * 90 + " " * 20)
        chosen = select_passage([make_passage(100), padded])
        assert chosen is padded

    def test_no_candidates(self, make_passage) -> None:
        assert select_passage([]) is None
        assert select_passage([make_passage(text="")]) is None


async def test_primary_collection_wins(fake_source, make_passage) -> None:
    source = fake_source(
        {"bukhari": [make_passage(100, collection="bukhari")], "muslim": []}
    )
    passage = await PassageRetriever(source).retrieve(Label.SABR)

    assert passage.collection == "bukhari"
    assert source.calls == [("patience", "bukhari")]


async def test_falls_back_to_secondary_collection(fake_source, make_passage) -> None:
    source = fake_source({"bukhari": [], "muslim": [make_passage(120)]})

    passage = await PassageRetriever(source).retrieve(Label.LONELINESS)

    assert len(passage.text) == 120
    assert source.calls == [("alone", "bukhari"), ("alone", "muslim")]


async def test_not_found_when_every_source_is_empty(fake_source) -> None:
    source = fake_source()
    with pytest.raises(PassageNotFoundError) as exc_info:
        await PassageRetriever(source).retrieve("Mercy")

    assert exc_info.value.term == "mercy"
    assert exc_info.value.sources == ["bukhari", "muslim"]


async def test_transport_error_propagates(fake_source) -> None:
    source = fake_source({"bukhari": PassageRetrievalError("boom")})
    with pytest.raises(PassageRetrievalError):
        await PassageRetriever(source).retrieve(Label.HOPE)


async def test_custom_collection_order(fake_source, make_passage) -> None:
    source = fake_source({"muslim": [make_passage(90)]})
    retriever = PassageRetriever(source, collections=["muslim", "bukhari"])

    await retriever.retrieve(Label.HOPE)

    assert source.calls == [("hope", "muslim")]


def test_requires_a_collection(fake_source) -> None:
    with pytest.raises(ValueError):
        PassageRetriever(fake_source(), collections=[])
