"""FastAPI server that exposes the practice test to browser clients."""

from __future__ import annotations

import logging
from threading import Thread
from typing import Literal

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field
import uvicorn

from dgca_practice.constants.about import APP_NAME, APP_VERSION
from dgca_practice.constants.network_constants import API_LOG_LEVEL, DEFAULT_HOST, DEFAULT_PORT
from dgca_practice.constants.practice_constants import (
    DEFAULT_QUESTION_COUNT,
    DEFAULT_TIME_LIMIT_MINUTES,
    RECENT_RESULTS_LIMIT,
)
from dgca_practice.core.errors import (
    InvalidConfiguration,
    InvalidOption,
    InvalidSessionState,
    NoActiveSession,
    QuestionBankError,
)
from dgca_practice.core.grading import format_duration, grade_for_percentage
from dgca_practice.core.markdown_math_renderer import renderer
from dgca_practice.core.models import AnswerRecord, SessionSnapshot, SessionSummary, TestResultRecord
from dgca_practice.core.practice_manager import PracticeManager
from dgca_practice.core.services.session_clock import format_clock, is_low_time

logger = logging.getLogger(__name__)


class StartPayload(BaseModel):
    """Payload schema for starting a practice test."""

    category: str | None = None
    question_count: int = Field(default=DEFAULT_QUESTION_COUNT, ge=1)
    time_limit_minutes: int = Field(default=DEFAULT_TIME_LIMIT_MINUTES, ge=1)
    label: str | None = None
    replace: bool = False


class AnswerPayload(BaseModel):
    """Payload schema for selecting an option on the current question."""

    selected_option_index: int


class NavigatePayload(BaseModel):
    """Payload schema for moving between questions."""

    action: Literal["next", "previous", "index"]
    index: int | None = None


def _get_practice_manager_dependency(practice_manager: PracticeManager):
    def dependency() -> PracticeManager:
        return practice_manager

    return dependency


def _translate_errors(exc: Exception) -> HTTPException:
    if isinstance(exc, NoActiveSession):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, InvalidSessionState):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, (InvalidConfiguration, InvalidOption, QuestionBankError)):
        return HTTPException(status_code=422, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


def _serialize_answer(record: AnswerRecord) -> dict[str, object]:
    return {
        "question_id": record.question_id,
        "selected_option_index": record.selected_option_index,
        "is_correct": record.is_correct,
    }


def _serialize_state(snapshot: SessionSnapshot) -> dict[str, object]:
    state = snapshot.state
    config = snapshot.config
    question = snapshot.current_question
    record = state.answers.get(question.id)
    in_progress = snapshot.is_active

    return {
        "label": config.label,
        "category": config.category,
        "phase": state.phase.value,
        "current_index": state.current_index,
        "total_questions": len(config.questions),
        "remaining_seconds": state.remaining_seconds,
        "clock_display": format_clock(state.remaining_seconds),
        "low_time": in_progress and is_low_time(state.remaining_seconds),
        "answered": list(snapshot.answered),
        "exit_requested": snapshot.exit_requested,
        "question": {
            "id": question.id,
            "prompt_html": renderer.render_fragment(question.prompt),
            "options": list(question.options),
            "difficulty": question.difficulty.value,
            "source": question.source,
            "selected_option_index": record.selected_option_index if record else None,
            # Never reveal the answer while the test is running.
            "correct_option_index": None if in_progress else question.correct_option_index,
        },
    }


def _serialize_summary(summary: SessionSummary) -> dict[str, object]:
    grade = grade_for_percentage(summary.score_percentage)
    review = []
    for question in summary.questions:
        record = summary.answers[question.id]
        review.append(
            {
                "question_id": question.id,
                "prompt_html": renderer.render_fragment(question.prompt),
                "options": list(question.options),
                "selected_option_index": record.selected_option_index,
                "correct_option_index": question.correct_option_index,
                "is_correct": record.is_correct,
                "explanation_html": (
                    renderer.render_fragment(question.explanation) if question.explanation else None
                ),
            }
        )
    return {
        "label": summary.label,
        "category": summary.category,
        "score_correct": summary.score_correct,
        "total_questions": summary.total_questions,
        "answered_count": summary.answered_count,
        "incorrect_count": summary.incorrect_count,
        "unanswered_count": summary.unanswered_count,
        "score_percentage": summary.score_percentage,
        "grade": grade.grade,
        "grade_message": grade.message,
        "elapsed_seconds": summary.elapsed_seconds,
        "elapsed_display": format_duration(summary.elapsed_seconds),
        "was_exited_early": summary.was_exited_early,
        "answers": [_serialize_answer(record) for record in summary.answers.values()],
        "review": review,
    }


def _serialize_result(result: TestResultRecord) -> dict[str, object]:
    return {
        "id": result.id,
        "label": result.label,
        "category": result.category,
        "score": result.score,
        "total_questions": result.total_questions,
        "time_taken": result.time_taken,
        "exited": result.exited,
        "created_at": result.created_at.isoformat(),
        "answers": [_serialize_answer(record) for record in result.answers],
    }


def create_api_app(practice_manager: PracticeManager) -> FastAPI:
    """Create a FastAPI application wired to the provided practice manager."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION)
    manager_dep = _get_practice_manager_dependency(practice_manager)

    @app.get("/health")
    def health() -> dict[str, object]:
        return {"status": "ok"}

    @app.get("/categories")
    def list_categories(manager: PracticeManager = Depends(manager_dep)) -> dict[str, object]:
        counts = manager.list_categories()
        return {
            "categories": [{"slug": slug, "question_count": count} for slug, count in counts.items()],
            "total_questions": sum(counts.values()),
        }

    @app.post("/session", status_code=201)
    def start_session(
        payload: StartPayload,
        manager: PracticeManager = Depends(manager_dep),
    ) -> dict[str, object]:
        try:
            manager.start_practice(
                category=payload.category,
                question_count=payload.question_count,
                time_limit_minutes=payload.time_limit_minutes,
                label=payload.label,
                replace=payload.replace,
            )
            return _serialize_state(manager.get_snapshot())
        except (InvalidConfiguration, InvalidSessionState, QuestionBankError) as exc:
            raise _translate_errors(exc) from exc

    @app.get("/session")
    def get_session(manager: PracticeManager = Depends(manager_dep)) -> dict[str, object]:
        try:
            return _serialize_state(manager.get_snapshot())
        except NoActiveSession as exc:
            raise _translate_errors(exc) from exc

    @app.post("/session/answer")
    def select_answer(
        payload: AnswerPayload,
        manager: PracticeManager = Depends(manager_dep),
    ) -> dict[str, object]:
        try:
            record = manager.select_answer(payload.selected_option_index)
        except (InvalidOption, InvalidSessionState) as exc:
            raise _translate_errors(exc) from exc
        # Correctness stays hidden until the test ends.
        return {"question_id": record.question_id, "selected_option_index": record.selected_option_index}

    @app.post("/session/navigate")
    def navigate(
        payload: NavigatePayload,
        manager: PracticeManager = Depends(manager_dep),
    ) -> dict[str, object]:
        try:
            if payload.action == "next":
                manager.go_to_next()
            elif payload.action == "previous":
                manager.go_to_previous()
            else:
                if payload.index is None:
                    raise HTTPException(status_code=422, detail="Navigation by index requires 'index'.")
                manager.go_to_index(payload.index)
            return _serialize_state(manager.get_snapshot())
        except InvalidSessionState as exc:
            raise _translate_errors(exc) from exc

    @app.post("/session/finish")
    def finish(manager: PracticeManager = Depends(manager_dep)) -> dict[str, object]:
        try:
            summary = manager.finish()
        except InvalidSessionState as exc:
            raise _translate_errors(exc) from exc
        return _serialize_summary(summary)

    @app.post("/session/exit/request")
    def request_exit(manager: PracticeManager = Depends(manager_dep)) -> dict[str, object]:
        try:
            manager.request_exit()
            return _serialize_state(manager.get_snapshot())
        except InvalidSessionState as exc:
            raise _translate_errors(exc) from exc

    @app.post("/session/exit/confirm")
    def confirm_exit(manager: PracticeManager = Depends(manager_dep)) -> dict[str, object]:
        try:
            summary = manager.confirm_exit()
        except InvalidSessionState as exc:
            raise _translate_errors(exc) from exc
        return _serialize_summary(summary)

    @app.post("/session/exit/cancel")
    def cancel_exit(manager: PracticeManager = Depends(manager_dep)) -> dict[str, object]:
        try:
            manager.cancel_exit()
            return _serialize_state(manager.get_snapshot())
        except InvalidSessionState as exc:
            raise _translate_errors(exc) from exc

    @app.get("/session/summary")
    def get_summary(manager: PracticeManager = Depends(manager_dep)) -> dict[str, object]:
        try:
            summary = manager.get_summary()
        except NoActiveSession as exc:
            raise _translate_errors(exc) from exc
        if summary is None:
            raise HTTPException(status_code=409, detail="The practice test has not finished yet.")
        return _serialize_summary(summary)

    @app.get("/results")
    def get_results(
        limit: int = RECENT_RESULTS_LIMIT,
        manager: PracticeManager = Depends(manager_dep),
    ) -> dict[str, object]:
        return {"results": [_serialize_result(result) for result in manager.get_results(limit)]}

    @app.get("/progress")
    def get_progress(manager: PracticeManager = Depends(manager_dep)) -> dict[str, object]:
        progress = manager.get_progress()
        return {
            "total_tests_taken": progress.total_tests_taken,
            "total_questions_attempted": progress.total_questions_attempted,
            "correct_answers": progress.correct_answers,
            "accuracy_percentage": progress.accuracy_percentage,
            "categories": [
                {
                    "category": entry.category,
                    "tests_taken": entry.tests_taken,
                    "questions_attempted": entry.questions_attempted,
                    "correct_answers": entry.correct_answers,
                    "average_score": entry.average_score,
                    "last_attempted": entry.last_attempted.isoformat(),
                }
                for entry in progress.categories
            ],
        }

    return app


def start_api_server(
    practice_manager: PracticeManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(practice_manager)
    config = uvicorn.Config(app=app, host=host, port=port, log_level=API_LOG_LEVEL)
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="PracticeApiServer", daemon=True)
    thread.start()
    logger.info("API server listening on http://%s:%d/", host, port)
    return thread
