from __future__ import annotations

import json
import logging
import threading
from contextlib import AbstractContextManager
from dataclasses import replace
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Any

from salon_booking.application.ports.booking_ledger import BookingLedgerPort
from salon_booking.domain.entities.booking import Booking, BookingStatus, NewBooking
from salon_booking.infrastructure.store.date_locks import DateLocks


class JsonBookingLedger(BookingLedgerPort):
    def __init__(self, data_dir: str = "./data/ledger") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._file_path = self._data_dir / "bookings.json"
        self._file_lock = threading.Lock()
        self._date_locks = DateLocks()
        self._logger = logging.getLogger(__name__)

    def _load_data(self) -> dict[str, Any]:
        """Load ledger data from JSON file, return default if missing."""
        if not self._file_path.exists():
            return {"next_id": 1, "bookings": [], "version": 1}

        try:
            with open(self._file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            # A corrupted ledger is never read as empty
            self._logger.error("Booking ledger unreadable", extra={"reason": str(e)})
            raise

        if "version" not in data:
            data["version"] = 1
        if "next_id" not in data:
            data["next_id"] = max((b["id"] for b in data.get("bookings", [])), default=0) + 1
        return data

    def _save_data(self, data: dict[str, Any]) -> None:
        """Save ledger data to JSON file atomically."""
        temp_path = self._file_path.with_suffix(".json.tmp")

        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._file_path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise

    def _serialize_booking(self, booking: Booking) -> dict[str, Any]:
        return {
            "id": booking.id,
            "name": booking.name,
            "email": booking.email,
            "phone": booking.phone,
            "service_type": booking.service_type,
            "date": booking.date.isoformat(),
            "time": booking.time.strftime("%H:%M"),
            "notes": booking.notes,
            "status": booking.status.value,
            "deposit_paid": booking.deposit_paid,
            "created_at": booking.created_at.isoformat() if booking.created_at else None,
        }

    def _deserialize_booking(self, data: dict[str, Any]) -> Booking:
        created_at = None
        if data.get("created_at"):
            try:
                created_at = datetime.fromisoformat(data["created_at"])
            except (ValueError, TypeError):
                pass

        return Booking(
            id=int(data["id"]),
            name=data.get("name", ""),
            email=data.get("email", ""),
            phone=data.get("phone", ""),
            service_type=data.get("service_type", ""),
            date=date.fromisoformat(data["date"]),
            time=time.fromisoformat(data["time"]),
            notes=data.get("notes"),
            status=BookingStatus(data.get("status", BookingStatus.pending.value)),
            deposit_paid=bool(data.get("deposit_paid", False)),
            created_at=created_at,
        )

    def _load_bookings(self) -> list[Booking]:
        return [self._deserialize_booking(row) for row in self._load_data().get("bookings", [])]

    def _update(self, booking_id: int, changes: dict[str, Any], expected: BookingStatus | None = None) -> Booking | None:
        with self._file_lock:
            data = self._load_data()
            rows = data.get("bookings", [])
            for index, row in enumerate(rows):
                if int(row["id"]) != booking_id:
                    continue
                current = self._deserialize_booking(row)
                if expected is not None and current.status != expected:
                    return None
                updated = replace(current, **changes)
                rows[index] = self._serialize_booking(updated)
                data["bookings"] = rows
                self._save_data(data)
                return updated
            return None

    def add(self, new_booking: NewBooking) -> Booking:
        with self._file_lock:
            data = self._load_data()
            booking = Booking(
                id=data["next_id"],
                name=new_booking.name,
                email=new_booking.email,
                phone=new_booking.phone,
                service_type=new_booking.service_type,
                date=new_booking.date,
                time=new_booking.time,
                notes=new_booking.notes,
                status=BookingStatus.pending,
                deposit_paid=False,
                created_at=datetime.now(timezone.utc),
            )
            data.setdefault("bookings", []).append(self._serialize_booking(booking))
            data["next_id"] = booking.id + 1
            self._save_data(data)
            return booking

    def get(self, booking_id: int) -> Booking | None:
        with self._file_lock:
            for booking in self._load_bookings():
                if booking.id == booking_id:
                    return booking
        return None

    def list_all(self) -> list[Booking]:
        with self._file_lock:
            bookings = self._load_bookings()
        epoch = datetime.min.replace(tzinfo=timezone.utc)
        return sorted(bookings, key=lambda b: (b.created_at or epoch, b.id), reverse=True)

    def list_for_date(self, target_date: date) -> list[Booking]:
        with self._file_lock:
            return [b for b in self._load_bookings() if b.date == target_date]

    def compare_and_set_status(
        self,
        booking_id: int,
        expected: BookingStatus,
        new_status: BookingStatus,
    ) -> Booking | None:
        return self._update(booking_id, {"status": new_status}, expected=expected)

    def move(
        self,
        booking_id: int,
        expected: BookingStatus,
        new_date: date,
        new_time: time,
    ) -> Booking | None:
        return self._update(booking_id, {"date": new_date, "time": new_time}, expected=expected)

    def set_deposit_paid(self, booking_id: int, deposit_paid: bool) -> Booking | None:
        return self._update(booking_id, {"deposit_paid": deposit_paid})

    def locked(self, *dates: date) -> AbstractContextManager[None]:
        return self._date_locks.hold(*dates)
