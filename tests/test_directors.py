"""Tests for board roster extraction."""

from app.core.directors import MAX_DIRECTOR_SLOTS, extract_board, format_director


class TestExtractBoard:
    def test_reads_named_slots_in_order(self):
        issuer = {
            "how_many_directors_total": "3",
            "director_1": "Jane Banda",
            "d1_title": "CEO",
            "d1_nationality": "Zambian",
            "director_2": "***",
            "director_3": "Peter Phiri",
            "d3_shares_in_the_co": "10%",
        }
        roster = extract_board(issuer)

        assert [d.name for d in roster.directors] == ["Jane Banda", "Peter Phiri"]
        assert [d.position for d in roster.directors] == [1, 3]
        assert roster.directors[1].shareholding == "10%"
        assert roster.declared_total == 3
        assert roster.is_complete is False

    def test_declared_total_is_clamped(self):
        roster = extract_board({"how_many_directors_total": "50"})
        assert roster.declared_total == MAX_DIRECTOR_SLOTS

    def test_unparseable_total_is_ignored(self):
        roster = extract_board({"how_many_directors_total": "several", "director_1": "A"})
        assert roster.declared_total is None
        assert roster.is_complete is True

    def test_no_issuer(self):
        roster = extract_board(None)
        assert roster.directors == []
        assert roster.is_complete is True

    def test_slots_beyond_bound_are_ignored(self):
        issuer = {f"director_{n}": f"Director {n}" for n in range(1, MAX_DIRECTOR_SLOTS + 3)}
        assert len(extract_board(issuer).directors) == MAX_DIRECTOR_SLOTS


def test_format_director():
    roster = extract_board({"director_1": "Jane Banda", "d1_title": "CEO", "d1_shares_in_the_co": "5%"})
    assert format_director(roster.directors[0]) == "Director 1: Jane Banda (CEO, shares: 5%)"
