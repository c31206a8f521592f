"""
GraphQL client for the vocab study service.

Fetches study lists and submits answers over a single GraphQL endpoint
(POST, JSON body with query/variables/operationName). Every failure is
mapped onto the StudyServiceError taxonomy so the session runtime can
treat them uniformly:

- TransportError: connection problems, timeouts, non-2xx responses
- MalformedResponseError: invalid JSON or unexpected payload shape
- RemoteServiceError: the service returned a GraphQL ``errors`` array

Usage:
    async with StudyGraphQLClient("http://127.0.0.1:3001/gql") as client:
        batch = await client.fetch_batch(subject_id=1, limit=5)
        verdict = await client.submit_answer(batch[0], "gato")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx
from loguru import logger

from src.study.challenge import Challenge
from src.study.service import (
    MalformedResponseError,
    RemoteServiceError,
    TransportError,
)

VOCAB_LIST_QUERY = """\
query VocabList($awesomeId: Int!, $limit: Int!) {
  getStudyList(awesomeId: $awesomeId, limit: $limit) {
    vocabId
    vocabStudyId
    prompt
    firstLang
    pos
    infinitive
    hint
    userNotes
    numLearningWords
  }
}
"""

CHECK_ANSWER_MUTATION = """\
mutation CheckVocabAnswer($vocabId: Int!, $vocabStudyId: Int!, $entry: String!) {
  checkResponse(vocabId: $vocabId, vocabStudyId: $vocabStudyId, entry: $entry)
}
"""


@dataclass
class GraphQLRequest:
    """Request payload for a GraphQL operation."""

    query: str
    operation_name: str
    variables: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert request to API payload format."""
        return {
            "query": self.query,
            "variables": self.variables,
            "operationName": self.operation_name,
        }


def vocab_list_request(subject_id: int, limit: int) -> GraphQLRequest:
    return GraphQLRequest(
        query=VOCAB_LIST_QUERY,
        operation_name="VocabList",
        variables={"awesomeId": subject_id, "limit": limit},
    )


def check_answer_request(challenge: Challenge, answer_text: str) -> GraphQLRequest:
    return GraphQLRequest(
        query=CHECK_ANSWER_MUTATION,
        operation_name="CheckVocabAnswer",
        variables={
            "vocabId": challenge.vocab_id,
            "vocabStudyId": challenge.vocab_study_id,
            "entry": answer_text,
        },
    )


class StudyGraphQLClient:
    """HTTP client for the GraphQL study service."""

    def __init__(
        self,
        api_url: str,
        timeout_seconds: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the study service client.

        Args:
            api_url: Full URL of the GraphQL endpoint
            timeout_seconds: Request timeout
            client: Pre-built AsyncClient (mainly for tests)
        """
        self.api_url = api_url
        self.timeout_seconds = timeout_seconds
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds),
            headers={"Accept": "application/json"},
            follow_redirects=True,
        )

    async def __aenter__(self) -> StudyGraphQLClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    # =========================================================================
    # Study service operations
    # =========================================================================

    async def fetch_batch(self, subject_id: int, limit: int) -> list[Challenge]:
        """
        Fetch up to ``limit`` challenges for a subject.

        Args:
            subject_id: Learner/subject identifier (``awesomeId`` on the wire)
            limit: Maximum number of challenges

        Returns:
            Challenges in the order the service returned them

        Raises:
            TransportError: On network or HTTP status failure
            MalformedResponseError: If the payload is not a list of challenges
            RemoteServiceError: If the service reports GraphQL errors
        """
        data = await self.execute(vocab_list_request(subject_id, limit))

        items = data.get("getStudyList")
        if not isinstance(items, list):
            raise MalformedResponseError("Response is missing the getStudyList list")

        challenges = []
        for index, item in enumerate(items):
            try:
                challenges.append(Challenge.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                raise MalformedResponseError(f"Invalid challenge at index {index}: {e}") from e

        logger.debug(f"Fetched {len(challenges)} challenges for subject {subject_id}")
        return challenges

    async def submit_answer(self, challenge: Challenge, answer_text: str) -> str:
        """
        Submit an answer and return the verdict text.

        Raises:
            TransportError: On network or HTTP status failure
            MalformedResponseError: If the verdict is not a string
            RemoteServiceError: If the service reports GraphQL errors
        """
        data = await self.execute(check_answer_request(challenge, answer_text))

        verdict = data.get("checkResponse")
        if not isinstance(verdict, str):
            raise MalformedResponseError("Response is missing the checkResponse verdict")
        return verdict

    # =========================================================================
    # Transport
    # =========================================================================

    async def execute(self, request: GraphQLRequest) -> dict[str, Any]:
        """
        POST a GraphQL request and return its ``data`` object.

        Raises:
            TransportError: On network or HTTP status failure
            MalformedResponseError: If the body is not a GraphQL response
            RemoteServiceError: If the body carries a non-empty ``errors`` array
        """
        try:
            response = await self.client.post(self.api_url, json=request.to_dict())
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning(f"{request.operation_name} timed out after {self.timeout_seconds}s")
            raise TransportError(f"Request timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            logger.warning(f"{request.operation_name} failed with HTTP {e.response.status_code}")
            raise TransportError(
                f"Study service returned HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            logger.warning(f"{request.operation_name} connection error: {e}")
            raise TransportError(f"Could not reach study service: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Response is not valid JSON: {e}") from e

        if not isinstance(body, dict):
            raise MalformedResponseError("Response body is not a JSON object")

        errors = body.get("errors")
        if errors:
            raise RemoteServiceError(_join_error_messages(errors))

        data = body.get("data")
        if not isinstance(data, dict):
            raise MalformedResponseError("Response has no data object")
        return data


def _join_error_messages(errors: Any) -> str:
    if not isinstance(errors, list):
        return str(errors)
    messages = []
    for error in errors:
        if isinstance(error, dict) and error.get("message"):
            messages.append(str(error["message"]))
        else:
            messages.append(str(error))
    return "; ".join(messages)
