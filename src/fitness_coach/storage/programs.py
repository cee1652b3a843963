"""Program storage for persisting coaching programs per user."""

import uuid
from datetime import date, datetime
from typing import Any, Optional

from fitness_coach.storage.base import BaseStorage, safe_key


class ProgramStorage(BaseStorage):
    """Storage for multi-week training programs."""

    def __init__(self) -> None:
        """Initialize program storage in the programs directory."""
        super().__init__("programs")

    def _generate_program_id(self) -> str:
        """Generate a unique program ID."""
        return str(uuid.uuid4())[:8]

    def _program_key(self, program_id: str) -> str:
        return f"program_{safe_key(program_id)}"

    def save_program(
        self,
        program: dict[str, Any],
        user_id: str,
        program_id: str | None = None,
        start_date: date | None = None,
    ) -> str:
        """
        Save a program for a user.

        The first save anchors the program to a start date (today unless
        given); later saves keep that anchor so the schedule does not drift.

        Args:
            program: Program data (should conform to the Program model)
            user_id: Owner of the program
            program_id: Optional program ID. If not provided, one will be generated.
            start_date: Optional date of Week 1 / Day 1

        Returns:
            The program ID
        """
        if program_id is None:
            program_id = program.get("id") or self._generate_program_id()

        existing = self.get_program(program_id) or {}
        program["id"] = program_id
        program["user_id"] = user_id
        if start_date is not None:
            program["start_date"] = start_date.isoformat()
        elif "start_date" not in program:
            program["start_date"] = existing.get("start_date") or date.today().isoformat()
        program["created_at"] = existing.get("created_at") or program.get("created_at") or datetime.now().isoformat()
        program["updated_at"] = datetime.now().isoformat()

        self.write(self._program_key(program_id), program)
        return program_id

    def get_program(self, program_id: str) -> Optional[dict[str, Any]]:
        """
        Get a program by ID.

        Args:
            program_id: The program ID

        Returns:
            The program data or None if not found
        """
        program = self.read(self._program_key(program_id))
        return program if isinstance(program, dict) else None

    def list_programs(self, user_id: str) -> list[dict[str, Any]]:
        """
        List a user's programs with summary information.

        Returns:
            Program summaries (id, title, goal, weeks, start_date), newest first
        """
        summaries: list[dict[str, Any]] = []
        for file_path in self.data_dir.glob("program_*.json"):
            program = self._load_json(file_path)
            if not isinstance(program, dict) or program.get("user_id") != user_id:
                continue
            summaries.append({
                "id": program.get("id", file_path.stem.replace("program_", "")),
                "title": program.get("title", "Untitled Program"),
                "goal": program.get("goal"),
                "weeks": program.get("weeks"),
                "start_date": program.get("start_date"),
                "created_at": program.get("created_at"),
            })
        summaries.sort(key=lambda p: p.get("created_at") or "", reverse=True)
        return summaries

    def get_latest_program(self, user_id: str) -> Optional[dict[str, Any]]:
        """The user's most recently created program, if any."""
        programs = self.list_programs(user_id)
        if not programs:
            return None
        return self.get_program(programs[0]["id"])

    def delete_program(self, program_id: str) -> bool:
        """
        Delete a program.

        Args:
            program_id: The program ID

        Returns:
            True if deleted, False if not found
        """
        return self.delete(self._program_key(program_id))
