"""Client for the coaching service: program source and coaching text."""

import logging
from typing import Any, Optional

import httpx

from fitness_coach.config import Config
from fitness_coach.exceptions import CollaboratorError

logger = logging.getLogger(__name__)


class CoachClient:
    """Client for the external coaching service."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the coaching service client.

        Args:
            base_url: Service base URL (defaults to COACH_BASE_URL)
            timeout: Request timeout in seconds (defaults to COACH_TIMEOUT)
            client: Optional preconfigured httpx client
        """
        self.base_url = (base_url or Config.COACH_BASE_URL).rstrip("/")
        self.client = client or httpx.Client(timeout=timeout or Config.COACH_TIMEOUT)

    def _get(self, endpoint: str, params: Optional[dict[str, Any]] = None) -> Any:
        """Make a GET request and return the decoded JSON body."""
        response = self.client.get(f"{self.base_url}/{endpoint}", params=params)
        if response.status_code != 200:
            raise CollaboratorError(f"Error {response.status_code}: {response.text}")
        return response.json()

    def _post(self, endpoint: str, body: dict[str, Any]) -> Any:
        """Make a POST request with a JSON body and return the decoded JSON body."""
        response = self.client.post(f"{self.base_url}/{endpoint}", json=body)
        if response.status_code != 200:
            raise CollaboratorError(f"Error {response.status_code}: {response.text}")
        return response.json()

    def list_programs(self, user_id: str) -> list[dict[str, Any]]:
        """
        List a user's programs.

        Args:
            user_id: User whose programs to list

        Returns:
            Program summaries, newest first; empty if the service is unavailable
        """
        try:
            data = self._get("coach/program/list", {"user_id": user_id})
        except (httpx.HTTPError, CollaboratorError, ValueError) as e:
            logger.warning("Program list unavailable for %s: %s", user_id, e)
            return []
        programs = data.get("programs") if isinstance(data, dict) else None
        return programs if isinstance(programs, list) else []

    def get_program(self, program_id: str) -> Optional[dict[str, Any]]:
        """
        Get a program by ID.

        Args:
            program_id: The program ID

        Returns:
            The program, or None if missing or the service is unavailable
        """
        try:
            data = self._get("coach/program/get", {"program_id": program_id})
        except (httpx.HTTPError, CollaboratorError, ValueError) as e:
            logger.warning("Program %s unavailable: %s", program_id, e)
            return None
        program = data.get("program") if isinstance(data, dict) else None
        return program if isinstance(program, dict) else None

    def get_latest_program(self, user_id: str) -> Optional[dict[str, Any]]:
        """The user's newest program, if any."""
        programs = self.list_programs(user_id)
        if not programs or not programs[0].get("id"):
            return None
        return self.get_program(str(programs[0]["id"]))

    def generate_program(
        self,
        user_id: str,
        goal: str = "General strength and wellness program.",
        weeks: int = 8,
        days_per_week: int = 3,
        home_only: bool = True,
        yoga_heavy: bool = True,
        assessment_summary: Optional[dict[str, Any]] = None,
        extra_context: str = "",
    ) -> dict[str, Any]:
        """
        Ask the coaching service to author a new program.

        Returns:
            The service response ({"program_id": ..., "program": {...}})

        Raises:
            CollaboratorError: if the service rejects the request
        """
        return self._post(
            "coach/program/generate",
            {
                "user_id": user_id,
                "goal": goal,
                "weeks": weeks,
                "days_per_week": days_per_week,
                "home_only": home_only,
                "yoga_heavy": yoga_heavy,
                "assessment_summary": assessment_summary,
                "extra_context": extra_context,
            },
        )

    def get_profile(self, user_id: str) -> Optional[dict[str, Any]]:
        """Fetch the user's profile; None if unavailable."""
        try:
            data = self._get("users/profile/get", {"user_id": user_id})
        except (httpx.HTTPError, CollaboratorError, ValueError) as e:
            logger.warning("Profile unavailable for %s: %s", user_id, e)
            return None
        if not isinstance(data, dict):
            return None
        profile = data.get("profile", data)
        return profile if isinstance(profile, dict) else None

    def ask_coach(self, question: str, user_id: str = "guest") -> Optional[str]:
        """
        Ask for coaching text.

        Failures are logged and yield None; callers treat the text as optional.

        Args:
            question: Free-form telemetry or question text
            user_id: User the question is about

        Returns:
            Coaching text, or None
        """
        try:
            data = self._post("coach/ask", {"user_id": user_id, "question": question})
        except (httpx.HTTPError, CollaboratorError, ValueError) as e:
            logger.warning("Coaching text unavailable: %s", e)
            return None
        if not isinstance(data, dict):
            return None
        text = data.get("answer") or data.get("text")
        return text.strip() if isinstance(text, str) and text.strip() else None

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()
