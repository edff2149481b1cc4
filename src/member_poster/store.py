"""Spreadsheet-backed member register."""

import logging
import os
import tempfile
import threading
from pathlib import Path

from openpyxl import Workbook, load_workbook

from .constants import HEALTH_DESIGNATION, WEALTH_DESIGNATION
from .errors import DuplicateMemberError, MemberNotFoundError, StoreError
from .models import MEMBER_FIELDS, Member

logger = logging.getLogger(__name__)

SHEET_NAME = "Members"


class MemberStore:
    """Members persisted in one sheet of an .xlsx workbook.

    Rows are keyed by (email, designation); email compares case-insensitively.
    Every mutation rewrites the workbook through a temporary file.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def list_members(self) -> list[Member]:
        with self._lock:
            return self._read()

    def get(self, email: str, designation: str) -> Member:
        key = _key(email, designation)
        for member in self.list_members():
            if member.key == key:
                return member
        raise MemberNotFoundError(f"No member with email '{email}' and designation '{designation}'")

    def add(self, member: Member) -> Member:
        with self._lock:
            members = self._read()
            if any(m.key == member.key for m in members):
                raise DuplicateMemberError(
                    f"Member '{member.email}' is already registered as '{member.designation}'"
                )
            members.append(member)
            self._write(members)
        logger.info("Registered %s (%s)", member.email, member.designation)
        return member

    def update(self, email: str, designation: str, updated: Member) -> Member:
        key = _key(email, designation)
        with self._lock:
            members = self._read()
            index = next((i for i, m in enumerate(members) if m.key == key), None)
            if index is None:
                raise MemberNotFoundError(
                    f"No member with email '{email}' and designation '{designation}'"
                )
            if updated.key != key and any(m.key == updated.key for m in members):
                raise DuplicateMemberError(
                    f"Member '{updated.email}' is already registered as '{updated.designation}'"
                )
            members[index] = updated
            self._write(members)
        return updated

    def delete(self, email: str, designation: str) -> None:
        key = _key(email, designation)
        with self._lock:
            members = self._read()
            remaining = [m for m in members if m.key != key]
            if len(remaining) == len(members):
                raise MemberNotFoundError(
                    f"No member with email '{email}' and designation '{designation}'"
                )
            self._write(remaining)
        logger.info("Deleted %s (%s)", email, designation)

    def search(self, term: str) -> list[Member]:
        """Members whose name, email, phone or designation contains the term."""
        needle = term.strip().lower()
        members = self.list_members()
        if not needle:
            return members
        return [
            m
            for m in members
            if any(needle in value.lower() for value in (m.name, m.email, m.phone, m.designation))
        ]

    def by_designation(self, designation: str) -> list[Member]:
        return [m for m in self.list_members() if m.has_designation(designation)]

    def stats(self) -> dict[str, int]:
        members = self.list_members()
        health = sum(1 for m in members if m.has_designation(HEALTH_DESIGNATION))
        wealth = sum(1 for m in members if m.has_designation(WEALTH_DESIGNATION))
        designated = sum(
            1
            for m in members
            if m.has_designation(HEALTH_DESIGNATION) or m.has_designation(WEALTH_DESIGNATION)
        )
        return {
            "total": len(members),
            "health_advisors": health,
            "wealth_managers": wealth,
            "designated": designated,
        }

    def _read(self) -> list[Member]:
        if not self.path.exists():
            return []
        try:
            workbook = load_workbook(self.path, read_only=True)
        except (OSError, ValueError, KeyError) as e:
            raise StoreError(f"Cannot read member workbook '{self.path}': {e}") from e
        try:
            if SHEET_NAME not in workbook.sheetnames:
                return []
            rows = workbook[SHEET_NAME].iter_rows(values_only=True)
            header = next(rows, None)
            if header is None:
                return []
            columns = [str(c).strip().lower() if c is not None else "" for c in header]
            members = []
            for row in rows:
                if row is None or all(cell is None for cell in row):
                    continue
                members.append(Member.from_row(dict(zip(columns, row))))
            return members
        finally:
            workbook.close()

    def _write(self, members: list[Member]) -> None:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = SHEET_NAME
        sheet.append(list(MEMBER_FIELDS))
        for member in members:
            sheet.append(member.to_row())

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            os.close(fd)
            workbook.save(tmp_name)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise StoreError(f"Cannot write member workbook '{self.path}': {e}") from e


def _key(email: str, designation: str) -> tuple[str, str]:
    return (email.strip().lower(), designation.strip())
