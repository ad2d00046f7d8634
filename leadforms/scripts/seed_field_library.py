from __future__ import annotations

from sqlalchemy.orm import Session

from leadforms.data.field_library_seed import STANDARD_FIELDS
from leadforms.db.session import SessionLocal
from leadforms.models.field_library import FieldLibrary

_UPDATABLE = ("label", "data_type", "default_placeholder", "default_validation", "translations", "enum_list", "category")


def upsert_field_library(db: Session, entries: list[dict]) -> tuple[int, int]:
    created = 0
    updated = 0

    for item in entries:
        name = str(item["name"]).strip()
        values = {
            "label": str(item["label"]).strip(),
            "data_type": str(item["data_type"]).strip(),
            "default_placeholder": str(item.get("default_placeholder") or "").strip() or None,
            "default_validation": dict(item.get("default_validation") or {}),
            "translations": dict(item.get("translations") or {}),
            "enum_list": list(item["enum_list"]) if item.get("enum_list") is not None else None,
            "category": str(item.get("category") or "general").strip(),
        }

        row = db.query(FieldLibrary).filter(FieldLibrary.name == name).first()
        if row is None:
            db.add(FieldLibrary(name=name, is_system_field=True, **values))
            created += 1
            continue

        changed = False
        for key in _UPDATABLE:
            if getattr(row, key) != values[key]:
                setattr(row, key, values[key])
                changed = True

        if changed:
            db.add(row)
            updated += 1

    db.commit()
    return created, updated


def main() -> None:
    db = SessionLocal()
    try:
        created, updated = upsert_field_library(db, STANDARD_FIELDS)
        total = db.query(FieldLibrary).count()
    finally:
        db.close()
    print(f"field library upsert done: created={created}, updated={updated}, total={total}")


if __name__ == "__main__":
    main()
