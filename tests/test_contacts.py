"""Tests for the contact set builder."""
from __future__ import annotations

import logging

import pytest

from conftest import ALL_IDS, build_directory
from orgchat.contacts import messageable_contacts


def _ids(people):
    return [p.id for p in people]


def _naive_total(contacts) -> int:
    return (
        (1 if contacts.manager else 0)
        + len(contacts.subordinates)
        + len(contacts.department_peers)
        + len(contacts.hr_staff)
    )


class TestGroups:
    def test_engineer_contacts(self, directory, ctx):
        contacts = messageable_contacts(ctx("xavier"), directory)

        assert contacts.manager is not None
        assert contacts.manager.id == "mark"
        assert contacts.manager.manager_name == "Dana Director"
        assert contacts.subordinates == []
        # inactive colleagues are not listed
        assert _ids(contacts.department_peers) == ["dana", "erin", "mark"]
        assert _ids(contacts.hr_staff) == ["hannah", "yasmin"]

    def test_manager_sees_reports_including_inactive(self, directory, ctx):
        contacts = messageable_contacts(ctx("mark"), directory)
        assert sorted(_ids(contacts.subordinates)) == ["erin", "ian", "xavier"]
        assert "mark" not in _ids(contacts.department_peers)

    def test_hr_staff_excludes_self(self, directory, ctx):
        contacts = messageable_contacts(ctx("hannah"), directory)
        assert _ids(contacts.hr_staff) == ["yasmin"]

    def test_top_of_org_has_no_manager(self, directory, ctx):
        assert messageable_contacts(ctx("cora"), directory).manager is None

    def test_unknown_employee_yields_empty_set(self, directory):
        contacts = messageable_contacts(None, directory)
        assert contacts.total_unique == 0
        assert contacts.manager is None


class TestDeduplication:
    def test_overlapping_groups_counted_once(self, directory, ctx):
        """Mark is both Xavier's manager and department peer."""
        contacts = messageable_contacts(ctx("xavier"), directory)
        assert contacts.total_unique == 5
        assert _naive_total(contacts) == 6

    def test_hr_manager_overlaps_everywhere(self, directory, ctx):
        contacts = messageable_contacts(ctx("hannah"), directory)
        # yasmin is report, peer and HR; cora is manager
        assert contacts.total_unique == 2
        assert _naive_total(contacts) == 4

    def test_disjoint_groups_sum_exactly(self):
        directory = build_directory([
            {"id": "boss", "name": "Boss", "department_id": "ops", "role_id": "ceo"},
            {"id": "solo", "name": "Solo", "department_id": "sales", "role_id": "sales-rep",
             "manager_id": "boss"},
            {"id": "rep", "name": "Rep", "department_id": "mkt", "manager_id": "solo"},
            {"id": "hr1", "name": "HR One", "department_id": "hr", "role_id": "hr-specialist"},
        ])
        contacts = messageable_contacts(directory.get_employee("solo"), directory)
        assert contacts.total_unique == _naive_total(contacts) == 3

    @pytest.mark.parametrize("employee_id", ALL_IDS)
    def test_total_is_size_of_union(self, directory, ctx, employee_id):
        contacts = messageable_contacts(ctx(employee_id), directory)
        union = set(_ids(contacts.subordinates) + _ids(contacts.department_peers))
        union |= set(_ids(contacts.hr_staff))
        if contacts.manager:
            union.add(contacts.manager.id)
        assert contacts.total_unique == len(union) == len(contacts.contact_ids())
        assert contacts.total_unique <= _naive_total(contacts)
        assert employee_id not in union


class TestSelfReference:
    def test_self_managed_employee_never_lists_self(self):
        directory = build_directory([
            {"id": "loop", "name": "Loop", "department_id": "eng", "manager_id": "loop"},
        ])
        contacts = messageable_contacts(directory.get_employee("loop"), directory)
        assert contacts.manager is None
        assert contacts.subordinates == []
        assert contacts.total_unique == 0

    def test_dangling_manager_reference(self):
        directory = build_directory([
            {"id": "orphan", "name": "Orphan", "department_id": "eng", "manager_id": "ghost"},
        ])
        contacts = messageable_contacts(directory.get_employee("orphan"), directory)
        assert contacts.manager is None


class TestDegradation:
    @pytest.mark.parametrize(
        "failing, empty_group",
        [
            ("list_hr_staff", "hr_staff"),
            ("list_department_members", "department_peers"),
            ("list_subordinates", "subordinates"),
        ],
    )
    def test_failed_group_is_empty_others_survive(self, flaky_factory, failing, empty_group):
        directory = flaky_factory(failing={failing})
        contacts = messageable_contacts(directory.get_employee("mark"), directory)

        assert getattr(contacts, empty_group) == []
        assert contacts.manager is not None
        for group in ("hr_staff", "department_peers", "subordinates"):
            if group != empty_group:
                assert getattr(contacts, group), group

    def test_failed_manager_lookup(self, flaky_factory):
        directory = flaky_factory(fail_ids={"mark"})
        contacts = messageable_contacts(directory.get_employee("xavier"), directory)
        assert contacts.manager is None
        assert contacts.hr_staff

    def test_manager_kept_when_its_manager_name_is_unavailable(self, flaky_factory, caplog):
        directory = flaky_factory(fail_ids={"dana"})
        with caplog.at_level(logging.WARNING, logger="orgchat.directory.base"):
            contacts = messageable_contacts(directory.get_employee("xavier"), directory)
        assert contacts.manager is not None
        assert contacts.manager.id == "mark"
        assert contacts.manager.manager_name is None
        assert contacts.total_unique == 5
        assert "Manager name of mark unavailable" in caplog.text
