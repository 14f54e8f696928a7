"""
Tests for the in-memory query builders.

Each test drives the builder chains the repositories use and checks
the resulting rows and the state left in the store.
"""

import asyncio
import copy

import pytest

from decisions_api.app.db.builders import NoResultError
from tests.fixtures import (
    ASSEMBLY_ID_1,
    ASSEMBLY_ID_2,
    DECISION_ID_1,
    DECISION_ID_2,
    DECISION_ID_3,
    decision_rows,
)

run = asyncio.run


class TestSelect:
    def test_select_all_returns_every_row_in_order(self, provider, db):
        provider.seed_table("decision", decision_rows())
        rows = run(db.select_from("decision").select_all().execute())
        assert [row["id"] for row in rows] == [DECISION_ID_1, DECISION_ID_2, DECISION_ID_3]

    def test_where_filters_in_insertion_order(self, provider, db):
        provider.seed_table("decision", decision_rows())
        rows = run(db.select_from("decision").where("assembly_id", "=", ASSEMBLY_ID_1).execute())
        assert [row["id"] for row in rows] == [DECISION_ID_1, DECISION_ID_2]

        rows = run(db.select_from("decision").where("assembly_id", "=", ASSEMBLY_ID_2).execute())
        assert [row["id"] for row in rows] == [DECISION_ID_3]

    def test_where_calls_are_combined_with_and(self, provider, db):
        provider.seed_table("decision", decision_rows())
        rows = run(
            db.select_from("decision")
            .where("assembly_id", "=", ASSEMBLY_ID_1)
            .where("is_passed", "=", True)
            .execute()
        )
        assert [row["id"] for row in rows] == [DECISION_ID_1]

    def test_qualified_column_names(self, provider, db):
        provider.seed_table("decision", decision_rows())
        rows = run(db.select_from("decision").where("decision.assembly_id", "=", ASSEMBLY_ID_2).execute())
        assert [row["id"] for row in rows] == [DECISION_ID_3]

    def test_missing_field_never_matches_equality(self, provider, db):
        provider.seed_table("decision", decision_rows())
        for value in (None, "x", 0):
            assert run(db.select_from("decision").where("foo", "=", value).execute()) == []

    def test_ilike(self, provider, db):
        provider.seed_table("decision", decision_rows())
        query = db.select_from("decision")
        assert [r["id"] for r in run(query.where("title", "ilike", "%climate%").execute())] == [DECISION_ID_1]
        assert [r["id"] for r in run(query.where("title", "ilike", "%CLIMATE%").execute())] == [DECISION_ID_1]
        assert run(query.where("title", "ilike", "zzz").execute()) == []

    def test_where_callback_builds_one_or_condition(self, provider, db):
        provider.seed_table("decision", decision_rows())
        rows = run(
            db.select_from("decision")
            .where("assembly_id", "=", ASSEMBLY_ID_1)
            .where(lambda eb: eb.or_([
                eb("title", "ilike", "%renewable%"),
                eb("full_text", "ilike", "%renewable%"),
            ]))
            .execute()
        )
        assert [row["id"] for row in rows] == [DECISION_ID_1]

    def test_camel_case_rows_are_matched_by_snake_case_column(self, provider, db):
        provider.seed_table("decision", [{"id": "d1", "fullText": "Renewable energy"}])
        rows = run(db.select_from("decision").where("full_text", "ilike", "%energy%").execute())
        assert [row["id"] for row in rows] == ["d1"]

    def test_projection_and_paging_calls_are_accepted_but_ignored(self, provider, db):
        provider.seed_table("decision", decision_rows())
        rows = run(
            db.select_from("decision")
            .left_join("assembly", "assembly.id", "decision.assembly_id")
            .select(["decision.id", "decision.title"])
            .order_by("decision.date", "desc")
            .group_by("decision.id")
            .limit(1)
            .offset(1)
            .execute()
        )
        assert len(rows) == 3
        assert rows[0]["summary"] == decision_rows()[0]["summary"]

    def test_builders_are_immutable(self, provider, db):
        provider.seed_table("decision", decision_rows())
        base = db.select_from("decision")
        filtered = base.where("assembly_id", "=", ASSEMBLY_ID_2)
        assert len(run(base.execute())) == 3
        assert len(run(filtered.execute())) == 1

    def test_returned_rows_are_copies(self, provider, db):
        provider.seed_table("decision", decision_rows())
        rows = run(db.select_from("decision").execute())
        rows[0]["title"] = "Changed"
        assert provider.store.read_all("decision")[0]["title"] == "Climate Change Initiative"


class TestSelectTakeFirst:
    def test_returns_first_match(self, provider, db):
        provider.seed_table("decision", decision_rows())
        row = run(db.select_from("decision").where("assembly_id", "=", ASSEMBLY_ID_1).execute_take_first())
        assert row["id"] == DECISION_ID_1

    def test_unknown_id_returns_none(self, provider, db):
        provider.seed_table("decision", decision_rows())
        assert run(db.select_from("decision").where("id", "=", "nope").execute_take_first()) is None

    def test_empty_table_returns_none(self, db):
        assert run(db.select_from("decision").execute_take_first()) is None

    def test_or_throw_raises_when_nothing_matches(self, provider, db):
        provider.seed_table("decision", decision_rows())
        with pytest.raises(NoResultError, match="No records found in table decision"):
            run(db.select_from("decision").where("id", "=", "nope").execute_take_first_or_throw())

    def test_or_throw_returns_first_match(self, provider, db):
        provider.seed_table("decision", decision_rows())
        row = run(db.select_from("decision").where("is_passed", "=", True).execute_take_first_or_throw())
        assert row["id"] == DECISION_ID_1


class TestInsert:
    def test_round_trip(self, db):
        record = {"id": "a1", "name": "National Assembly"}
        inserted = run(db.insert_into("assembly").values(record).returning(["id", "name"]).execute())
        assert inserted == [record]
        assert run(db.select_from("assembly").select_all().execute()) == [record]

    def test_input_is_copied_at_insert_time(self, db):
        record = {"id": "a1", "name": "National Assembly"}
        run(db.insert_into("assembly").values(record).returning().execute())
        record["name"] = "Mutated"
        rows = run(db.select_from("assembly").execute())
        assert rows[0]["name"] == "National Assembly"

    def test_many_rows_are_appended(self, provider, db):
        provider.seed_table("assembly", [{"id": "a0", "name": "Existing"}])
        records = [{"id": "a1", "name": "One"}, {"id": "a2", "name": "Two"}]
        run(db.insert_into("assembly").values(records).execute())
        rows = run(db.select_from("assembly").execute())
        assert [row["id"] for row in rows] == ["a0", "a1", "a2"]

    def test_unknown_fields_are_accepted(self, db):
        row = run(db.insert_into("assembly").values({"name": "No id", "extra": 1}).returning().execute_take_first())
        assert row == {"name": "No id", "extra": 1}

    def test_take_first_of_nothing(self, db):
        assert run(db.insert_into("assembly").values([]).returning().execute_take_first()) is None
        with pytest.raises(NoResultError, match="Failed to insert into assembly"):
            run(db.insert_into("assembly").values([]).returning().execute_take_first_or_throw())


class TestUpdate:
    def test_only_the_matching_row_changes(self, provider, db):
        provider.seed_table("decision", decision_rows())
        before = copy.deepcopy(provider.store.read_all("decision"))

        updated = run(
            db.update_table("decision")
            .set({"title": "Updated Title"})
            .where("id", "=", DECISION_ID_2)
            .returning(["id", "title"])
            .execute()
        )

        after = provider.store.read_all("decision")
        assert len(after) == len(before)
        assert updated == [{**before[1], "title": "Updated Title"}]
        assert after[0] == before[0]
        assert after[2] == before[2]
        assert after[1] == {**before[1], "title": "Updated Title"}

    def test_all_matching_rows_are_returned_in_table_order(self, provider, db):
        provider.seed_table("decision", decision_rows())
        updated = run(
            db.update_table("decision")
            .set({"source": "archive"})
            .where("assembly_id", "=", ASSEMBLY_ID_1)
            .returning()
            .execute()
        )
        assert [row["id"] for row in updated] == [DECISION_ID_1, DECISION_ID_2]
        assert all(row["source"] == "archive" for row in updated)

    def test_no_match(self, provider, db):
        provider.seed_table("decision", decision_rows())
        query = db.update_table("decision").set({"title": "x"}).where("id", "=", "nope").returning()
        assert run(query.execute()) == []
        assert run(query.execute_take_first()) is None
        with pytest.raises(NoResultError, match="No records updated in decision"):
            run(query.execute_take_first_or_throw())

    def test_take_first_returns_updated_row(self, provider, db):
        provider.seed_table("decision", decision_rows())
        row = run(
            db.update_table("decision")
            .set({"is_passed": False})
            .where("id", "=", DECISION_ID_1)
            .returning()
            .execute_take_first_or_throw()
        )
        assert row["id"] == DECISION_ID_1
        assert row["is_passed"] is False


class TestDelete:
    def test_returns_affected_count_and_keeps_order(self, provider, db):
        rows = [{"id": i, "group": "x" if i in (2, 4) else "y"} for i in range(1, 6)]
        provider.seed_table("individual_vote", rows)

        result = run(db.delete_from("individual_vote").where("group", "=", "x").execute())

        assert result == [{"affected": 2}]
        remaining = provider.store.read_all("individual_vote")
        assert [row["id"] for row in remaining] == [1, 3, 5]

    def test_no_match_affects_nothing(self, provider, db):
        provider.seed_table("decision", decision_rows())
        result = run(db.delete_from("decision").where("id", "=", "nope").execute())
        assert result == [{"affected": 0}]
        assert len(provider.store.read_all("decision")) == 3


class TestSchemaSurface:
    def test_schema_statements_are_inert(self, db):
        create = db.schema.create_table("decision").if_not_exists().add_column("id", "text")
        assert run(create.execute()) == {}
        assert run(db.schema.drop_table("decision").if_exists().execute()) == {}

    def test_destroy_is_a_no_op(self, provider, db):
        provider.seed_table("assembly", [{"id": "a1"}])
        assert run(db.destroy()) is None
        assert len(provider.store.read_all("assembly")) == 1
