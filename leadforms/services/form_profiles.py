from __future__ import annotations

from dataclasses import dataclass, replace

from leadforms.core.config import settings


@dataclass(frozen=True)
class FormProfile:
    """Behavioral switches distinguishing the two form session flavors.

    ``simple`` retries a failed field fetch and starts list fields with one blank
    row; ``dynamic`` fails fast with a manual refresh, starts multi-select arrays
    empty and localizes validation messages.
    """

    name: str
    retry_on_load_failure: bool
    array_defaults_to_blank_row: bool
    localized_messages: bool
    enforce_required_checkbox: bool = False
    load_retries: int = 2
    load_retry_delay_seconds: float = 1.0


SIMPLE_PROFILE = FormProfile(
    name="simple",
    retry_on_load_failure=True,
    array_defaults_to_blank_row=True,
    localized_messages=False,
)

DYNAMIC_PROFILE = FormProfile(
    name="dynamic",
    retry_on_load_failure=False,
    array_defaults_to_blank_row=False,
    localized_messages=True,
)

PROFILES = {profile.name: profile for profile in (SIMPLE_PROFILE, DYNAMIC_PROFILE)}


def profile_from_settings(name: str | None = None) -> FormProfile:
    key = str(name or settings.FORM_PROFILE or "").strip().lower()
    base = PROFILES.get(key, DYNAMIC_PROFILE)
    return replace(
        base,
        enforce_required_checkbox=bool(settings.FORM_ENFORCE_REQUIRED_CHECKBOX),
        load_retries=max(int(settings.FORM_FETCH_RETRIES), 0),
        load_retry_delay_seconds=max(float(settings.FORM_FETCH_RETRY_DELAY_SECONDS), 0.0),
    )
