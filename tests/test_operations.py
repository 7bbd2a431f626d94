from sqlalchemy import select
import pytest

from orm_practice import Member, SEED_MEMBERS, seed_and_query, lookup, count_members, insert_member


def _names(persistence):
    with persistence.SessionFactory() as session:
        return session.scalars(select(Member.name).order_by(Member.id)).all()


class TestSeedAndQuery:
    def test_seed_then_query(self, persistence, capsys):
        member = seed_and_query(persistence, "잔다르크")

        assert member is not None
        assert member.name == "잔다르크"
        assert member.nick_name == "다라"
        assert member.age == 18
        assert member.id is not None

        assert capsys.readouterr().out == f"Member [id={member.id}, name=잔다르크]\n"

        with persistence.SessionFactory() as session:
            matches = session.scalars(select(Member).where(Member.name == "잔다르크")).all()
            assert len(matches) == 1

    @pytest.mark.parametrize("name", [values[0] for values in SEED_MEMBERS])
    def test_each_seeded_name_found(self, persistence, name):
        seed_and_query(persistence)

        assert lookup(persistence, name).name == name

    def test_adds_exactly_four(self, persistence):
        with persistence.SessionFactory.begin() as session:
            insert_member(session, Member("existing"))

        seed_and_query(persistence)

        with persistence.SessionFactory() as session:
            assert count_members(session) == 5

        assert _names(persistence) == ["existing"] + [values[0] for values in SEED_MEMBERS]

    def test_name_not_seeded(self, persistence, capsys):
        assert seed_and_query(persistence, "111") is None
        assert capsys.readouterr().out == "None\n"

        # Seed data is still committed
        assert len(_names(persistence)) == 4

    def test_rollback_after_one_insert(self, persistence, capsys):
        # The second member violates NOT NULL on name
        members = [Member("foo"), Member(None), Member("bar")]

        assert seed_and_query(persistence, "foo", members=members) is None
        assert capsys.readouterr().out == ""
        assert _names(persistence) == []

    def test_failure_is_logged(self, persistence, caplog):
        def failing_members():
            yield Member("foo")
            raise RuntimeError("boom")

        with caplog.at_level("DEBUG", logger="orm_practice"):
            assert seed_and_query(persistence, "foo", members=failing_members()) is None

        assert "RuntimeError: boom" in caplog.text
        assert "Rolling back" in caplog.text
        assert _names(persistence) == []

    def test_seed_twice_keeps_second_seed(self, persistence, capsys, caplog):
        seed_and_query(persistence)
        capsys.readouterr()

        # Second seed commits four more rows, the lookup then finds two matches
        assert seed_and_query(persistence) is None
        assert capsys.readouterr().out == ""

        assert len(_names(persistence)) == 8
        assert "Lookup failed" in caplog.text
        assert "Seeding failed" not in caplog.text


class TestLookup:
    def test_lookup_empty_store(self, persistence, capsys):
        assert lookup(persistence, "111") is None
        assert capsys.readouterr().out == "None\n"

    def test_lookup_default_name(self, persistence):
        with persistence.SessionFactory.begin() as session:
            insert_member(session, Member("111"))

        member = lookup(persistence)
        assert member.name == "111"

    def test_lookup_does_not_write(self, persistence):
        seed_and_query(persistence)
        lookup(persistence, "감강찬")

        assert len(_names(persistence)) == 4

    def test_lookup_several_matches(self, persistence, caplog):
        with persistence.SessionFactory.begin() as session:
            session.add_all([Member("dup"), Member("dup")])

        assert lookup(persistence, "dup") is None
        assert "NonUniqueResultError" in caplog.text
