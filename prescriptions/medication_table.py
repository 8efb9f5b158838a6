"""
The prescription table: medication rows with type-dependent dosage.

All mutations go through MedicationTableModel so serialize() always reflects
the current table. Ids are assigned once per row and survive deletions of
other rows; only display positions move.
"""
import itertools
import json
from typing import Any, Iterable, List, Mapping, Optional

from rx_assist.exceptions import BlockError, ValidationError

from .catalog import (
    DURATION_NUMBERS,
    DURATION_UNITS,
    MEAL_OPTIONS,
    MEDICATION_TYPES,
    SYRUP_ML_OPTIONS,
    TABLET_QUANTITIES,
    TIME_SLOTS,
    is_syrup_like,
    is_tablet_like,
    uses_time_slots,
)
from .types import Duration, InstructionDosage, MedicationRecord, SlotDosage

SLOT_FIELDS = ("active", "meal", "quantity")

MANUAL_QUANTITY = "manual"


def default_dosage(med_type: str):
    """Fresh dosage of the shape `med_type` calls for"""
    if uses_time_slots(med_type):
        return SlotDosage()
    return InstructionDosage()


def _invalid(field: str, message: str, value: Any = None) -> ValidationError:
    return ValidationError(
        message=message,
        code="VALIDATION_ERROR",
        detail={"errors": [{"field": field, "message": message, "value": value}]},
    )


def _to_int(field: str, value: Any) -> int:
    if isinstance(value, bool):
        raise _invalid(field, f"{field} must be a number", value)
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise _invalid(field, f"{field} must be a number", value)


class MedicationTableModel:

    def __init__(self):
        self._records: List[MedicationRecord] = []
        self._ids = itertools.count(1)

    def __len__(self):
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    # ------------------------------------------------------------------
    # rows
    # ------------------------------------------------------------------

    def _new_record(self, name: str = "") -> MedicationRecord:
        med_type = MEDICATION_TYPES[0]
        record = MedicationRecord(
            id=f"med-{next(self._ids)}",
            name=name,
            type=med_type,
            dosage=default_dosage(med_type),
        )
        self._records.append(record)
        return record

    def add_empty_row(self) -> MedicationRecord:
        return self._new_record()

    def has_name(self, name: str) -> bool:
        key = name.strip().casefold()
        return any(record.name.strip().casefold() == key for record in self._records)

    def add_from_suggestion(self, name: str) -> Optional[MedicationRecord]:
        """Add a row for an AI-suggested medication; None if it is already listed"""
        name = name.strip()
        if not name or self.has_name(name):
            return None
        return self._new_record(name)

    def delete_row(self, index: int) -> MedicationRecord:
        """Remove by display position (0-based)"""
        if not isinstance(index, int) or not 0 <= index < len(self._records):
            raise ValidationError(
                message="No medication row at this position",
                code="INVALID_ROW_INDEX",
                detail={"index": index, "rows": len(self._records)},
            )
        return self._records.pop(index)

    def get(self, record_id: str) -> MedicationRecord:
        for record in self._records:
            if record.id == record_id:
                return record
        raise BlockError(
            message="Medication row not found",
            code="NOT_FOUND",
            detail={"id": record_id},
            http_status=404,
        )

    def position(self, record_id: str) -> int:
        """1-based display number of a row"""
        return self._records.index(self.get(record_id)) + 1

    # ------------------------------------------------------------------
    # fields
    # ------------------------------------------------------------------

    def update_field(self, record_id: str, field: str, value: Any) -> MedicationRecord:
        record = self.get(record_id)
        if field == "name":
            record.name = "" if value is None else str(value)
        elif field == "type":
            self._set_type(record, value)
        elif field == "instruction":
            record.instruction = "" if value is None else str(value)
        elif field == "duration":
            if not isinstance(value, Mapping):
                raise _invalid("duration", "duration must be an object with number and unit", value)
            number = self._duration_number(value.get("number", record.duration.number))
            unit = self._duration_unit(value.get("unit", record.duration.unit))
            record.duration = Duration(number=number, unit=unit)
        elif field == "duration_number":
            record.duration.number = self._duration_number(value)
        elif field == "duration_unit":
            record.duration.unit = self._duration_unit(value)
        else:
            raise _invalid(field, f"Unknown medication field: {field}", value)
        return record

    def _set_type(self, record: MedicationRecord, value: Any):
        if value not in MEDICATION_TYPES:
            raise _invalid("type", f"Unknown medication type: {value}", value)
        # changing the form always discards the old dosage, even when the
        # new type has the same shape
        if value != record.type:
            record.type = value
            record.dosage = default_dosage(value)

    def _duration_number(self, value: Any) -> int:
        number = _to_int("duration.number", value)
        if number not in DURATION_NUMBERS:
            raise _invalid("duration.number", "duration must be between 1 and 15", value)
        return number

    def _duration_unit(self, value: Any) -> str:
        if value not in DURATION_UNITS:
            raise _invalid("duration.unit", "duration unit must be days, weeks or months", value)
        return value

    # ------------------------------------------------------------------
    # dosage
    # ------------------------------------------------------------------

    def update_dosage_field(self, record_id: str, time_slot: Optional[str], field: str, value: Any) -> MedicationRecord:
        record = self.get(record_id)
        if isinstance(record.dosage, InstructionDosage):
            if field != "instruction":
                raise _invalid(f"dosage.{field}", f"{record.type} dosage only has an instruction", value)
            record.dosage.instruction = "" if value is None else str(value)
            return record

        if time_slot not in TIME_SLOTS:
            raise _invalid("dosage", f"Unknown time slot: {time_slot}", time_slot)
        slot = record.dosage.slot(time_slot)
        label = f"dosage.{time_slot}.{field}"
        if field == "active":
            slot.active = bool(value)
        elif field == "meal":
            meal = value or ""
            if meal not in MEAL_OPTIONS:
                raise _invalid(label, "meal must be before or after", value)
            slot.meal = meal
        elif field == "quantity":
            slot.quantity = self._quantity(record.type, label, value)
        else:
            raise _invalid(label, f"Unknown dosage field: {field}", value)
        return record

    def _quantity(self, med_type: str, label: str, value: Any):
        if value is None or value == "" or value == MANUAL_QUANTITY:
            # "manual" switches a syrup to typed ml; nothing entered yet
            return ""
        quantity = _to_int(label, value)
        if is_tablet_like(med_type) and quantity not in TABLET_QUANTITIES:
            raise _invalid(label, "tablet quantity must be between 1 and 5", value)
        if is_syrup_like(med_type) and quantity <= 0:
            raise _invalid(label, "ml must be a positive number", value)
        return quantity

    # ------------------------------------------------------------------
    # serialization
    # ------------------------------------------------------------------

    def serialize(self) -> List[dict]:
        """Snapshot of every row: the submission payload"""
        return [record.to_dict() for record in self._records]

    def to_json(self) -> str:
        return json.dumps(self.serialize())

    @classmethod
    def from_serialized(cls, items: Iterable[Mapping]) -> "MedicationTableModel":
        """
        Rebuild a table from a submitted snapshot. Every value is replayed
        through the mutation operations so it gets the same validation.
        Submitted ids are not trusted; rows get fresh ids in order.
        """
        table = cls()
        for position, item in enumerate(items):
            if not isinstance(item, Mapping):
                raise _invalid(f"medications[{position}]", "each medication must be an object", item)
            record = table.add_empty_row()
            table.update_field(record.id, "name", item.get("name", ""))
            table.update_field(record.id, "type", item.get("type", MEDICATION_TYPES[0]))
            if "duration" in item:
                table.update_field(record.id, "duration", item["duration"])
            table.update_field(record.id, "instruction", item.get("instruction", ""))
            table._replay_dosage(record, item.get("dosage") or {})
        return table

    def _replay_dosage(self, record: MedicationRecord, dosage: Mapping):
        if not isinstance(dosage, Mapping):
            raise _invalid("dosage", "dosage must be an object", dosage)
        if isinstance(record.dosage, InstructionDosage):
            self.update_dosage_field(record.id, None, "instruction", dosage.get("instruction", ""))
            return
        for time_slot in TIME_SLOTS:
            slot = dosage.get(time_slot)
            if not isinstance(slot, Mapping):
                continue
            for field in SLOT_FIELDS:
                if field in slot:
                    self.update_dosage_field(record.id, time_slot, field, slot[field])
