"""Registration form state and validation for new kitchen projects."""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date
from typing import Callable, Sequence

from kitchen_tracker.constant import INSTALLERS, SELLERS
from kitchen_tracker.models import NewKitchen

MISSING_FIELDS_MESSAGE = "Please fill in all fields."

FIELD_LABELS: dict[str, str] = {
    "ldap": "LDAP / User",
    "order_number": "Order Number",
    "client_name": "Client Name",
    "seller": "Seller",
    "installer": "Installer",
    "installation_date": "Installation Date",
}


class RegistrationError(ValueError):
    """Aggregate validation failure for a registration submission."""

    def __init__(self, message: str, missing: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.missing = tuple(missing)


@dataclass
class RegistrationFields:
    """Editable registration form values."""

    ldap: str = ""
    order_number: str = ""
    client_name: str = ""
    seller: str = ""
    installer: str = ""
    installation_date: str = ""

    @classmethod
    def blank(
        cls,
        sellers: Sequence[str] = SELLERS,
        installers: Sequence[str] = INSTALLERS,
        today: date | None = None,
    ) -> RegistrationFields:
        """Default form state: empty text, first configured options, today's date."""
        today = today or date.today()
        return cls(
            seller=sellers[0] if sellers else "",
            installer=installers[0] if installers else "",
            installation_date=today.isoformat(),
        )

    def values(self) -> dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def submit_registration(
    form: RegistrationFields,
    sellers: Sequence[str] = SELLERS,
    installers: Sequence[str] = INSTALLERS,
) -> NewKitchen:
    """Validate the form and build the kitchen record without an id."""
    values = {name: value.strip() for name, value in form.values().items()}

    missing = [name for name, value in values.items() if not value]
    if missing:
        raise RegistrationError(MISSING_FIELDS_MESSAGE, missing)

    if values["seller"] not in sellers:
        raise RegistrationError(f"Unknown seller: {values['seller']}")
    if values["installer"] not in installers:
        raise RegistrationError(f"Unknown installer: {values['installer']}")

    try:
        installed_on = date.fromisoformat(values["installation_date"])
    except ValueError:
        raise RegistrationError(
            f"Invalid installation date: {values['installation_date']} (expected YYYY-MM-DD)"
        ) from None
    values["installation_date"] = installed_on.isoformat()

    return NewKitchen(**values)


def register(
    form: RegistrationFields,
    on_add_kitchen: Callable[[NewKitchen], object],
    sellers: Sequence[str] = SELLERS,
    installers: Sequence[str] = INSTALLERS,
    today: date | None = None,
) -> RegistrationFields:
    """
    Submit the form and hand the new kitchen to the owning store.

    Returns the blank form the caller should switch to. On RegistrationError
    the callback is not invoked and `form` is left untouched.
    """
    new_kitchen = submit_registration(form, sellers, installers)
    on_add_kitchen(new_kitchen)
    return RegistrationFields.blank(sellers, installers, today)


def cycle_option(options: Sequence[str], current: str, delta: int) -> str:
    """Step an enumerated field through its configured options, wrapping around."""
    if not options:
        return current
    try:
        idx = list(options).index(current)
    except ValueError:
        return options[0]
    return options[(idx + delta) % len(options)]
