"""Tests for kitchen registration validation and form reset."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date

import pytest

from kitchen_tracker.constant import INSTALLERS, SELLERS
from kitchen_tracker.models import NewKitchen
from kitchen_tracker.registration import (
    MISSING_FIELDS_MESSAGE,
    RegistrationError,
    RegistrationFields,
    cycle_option,
    register,
    submit_registration,
)


@pytest.fixture
def filled_form():
    return RegistrationFields(
        ldap="LDAP1",
        order_number="80112233",
        client_name="Juan Perez",
        seller="Lara",
        installer="Instalador A",
        installation_date="2024-01-15",
    )


class TestBlankForm:

    def test_defaults_to_first_options_and_today(self):
        form = RegistrationFields.blank(today=date(2024, 5, 2))
        assert form.ldap == form.order_number == form.client_name == ""
        assert form.seller == SELLERS[0]
        assert form.installer == INSTALLERS[0]
        assert form.installation_date == "2024-05-02"

    def test_uses_given_option_sets(self):
        form = RegistrationFields.blank(["Zoe"], ["Crew 9"], today=date(2024, 1, 1))
        assert (form.seller, form.installer) == ("Zoe", "Crew 9")


class TestSubmitRegistration:

    def test_builds_kitchen_without_id(self, filled_form):
        new_kitchen = submit_registration(filled_form)
        assert new_kitchen == NewKitchen(
            ldap="LDAP1",
            order_number="80112233",
            client_name="Juan Perez",
            seller="Lara",
            installer="Instalador A",
            installation_date="2024-01-15",
        )
        assert "id" not in asdict(new_kitchen)

    def test_strips_whitespace(self, filled_form):
        filled_form.client_name = "  Juan Perez  "
        assert submit_registration(filled_form).client_name == "Juan Perez"

    @pytest.mark.parametrize(
        "field_name", ["ldap", "order_number", "client_name", "seller", "installer", "installation_date"]
    )
    def test_any_empty_field_fails(self, filled_form, field_name):
        setattr(filled_form, field_name, "")
        with pytest.raises(RegistrationError, match=MISSING_FIELDS_MESSAGE) as excinfo:
            submit_registration(filled_form)
        assert field_name in excinfo.value.missing

    def test_whitespace_only_counts_as_empty(self, filled_form):
        filled_form.ldap = "   "
        with pytest.raises(RegistrationError):
            submit_registration(filled_form)

    def test_unknown_seller_fails(self, filled_form):
        filled_form.seller = "Somebody"
        with pytest.raises(RegistrationError, match="seller"):
            submit_registration(filled_form)

    def test_unknown_installer_fails(self, filled_form):
        filled_form.installer = "Instalador Z"
        with pytest.raises(RegistrationError, match="installer"):
            submit_registration(filled_form)

    @pytest.mark.parametrize("value", ["banana", "2024-13-45", "15/01/2024"])
    def test_installation_date_must_be_calendar_date(self, filled_form, value):
        filled_form.installation_date = value
        with pytest.raises(RegistrationError, match="installation date"):
            submit_registration(filled_form)

    def test_invalid_date_skips_callback(self, filled_form):
        filled_form.installation_date = "banana"
        received = []
        with pytest.raises(RegistrationError):
            register(filled_form, received.append)
        assert received == []

    def test_is_a_value_error(self, filled_form):
        filled_form.order_number = ""
        with pytest.raises(ValueError):
            submit_registration(filled_form)

    def test_order_number_uniqueness_not_enforced(self, filled_form):
        first = submit_registration(filled_form)
        second = submit_registration(filled_form)
        assert first == second


class TestRegister:

    def test_success_invokes_callback_once_and_resets(self, filled_form):
        received = []
        fresh = register(filled_form, received.append, today=date(2024, 6, 1))

        assert received == [
            NewKitchen(
                ldap="LDAP1",
                order_number="80112233",
                client_name="Juan Perez",
                seller="Lara",
                installer="Instalador A",
                installation_date="2024-01-15",
            )
        ]
        assert fresh == RegistrationFields(
            seller=SELLERS[0],
            installer=INSTALLERS[0],
            installation_date="2024-06-01",
        )

    def test_missing_client_name_skips_callback(self, filled_form):
        filled_form.client_name = ""
        received = []
        with pytest.raises(RegistrationError):
            register(filled_form, received.append)
        assert received == []

    def test_failure_leaves_form_intact(self, filled_form):
        filled_form.client_name = ""
        before = filled_form.values()
        with pytest.raises(RegistrationError):
            register(filled_form, lambda kitchen: None)
        assert filled_form.values() == before


class TestCycleOption:

    def test_wraps_forward_and_back(self):
        assert cycle_option(SELLERS, SELLERS[-1], 1) == SELLERS[0]
        assert cycle_option(SELLERS, SELLERS[0], -1) == SELLERS[-1]

    def test_unknown_value_snaps_to_first(self):
        assert cycle_option(INSTALLERS, "nope", 1) == INSTALLERS[0]

    def test_no_options_keeps_value(self):
        assert cycle_option([], "x", 1) == "x"
