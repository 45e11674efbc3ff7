"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the registry's error
taxonomy. Services raise these directly; FastAPI renders them with the
matching status code.

Usage:
    from app.utils.exceptions import NotFoundError, DuplicateError
    raise NotFoundError("SWIFT code DEUTDEFFXXX not found.")
    raise DuplicateError("SWIFT code DEUTDEFFXXX already exists.")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 SWIFT 코드가 없을 때 사용.

    404 Not Found exception.
    Raised when a point lookup or delete references a code that does not exist.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(HTTPException):
    """409 Conflict 예외 — 현재 저장소 상태와 충돌하는 요청.

    409 Conflict exception.
    Base class for requests that clash with the current state of the registry.

    Args:
        detail: 오류 메시지 (Error message, default: "Conflict")
    """

    def __init__(self, detail: str = "Conflict") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class DuplicateError(ConflictError):
    """409 Conflict 예외 — 중복 SWIFT 코드 생성 시도 시 사용.

    Raised when creating a code that already exists, whether found by the
    pre-check or reported by the database unique constraint.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(detail=detail)


class BranchesExistError(ConflictError):
    """409 Conflict 예외 — 지점이 남아있는 본점 삭제 시도.

    Raised when deleting a headquarters whose branch group is not empty.

    Args:
        swift_code: 본점 코드 (Headquarters code)
        branch_count: 남아있는 지점 수 (Number of remaining branches)
    """

    def __init__(self, swift_code: str, branch_count: int) -> None:
        self.swift_code: str = swift_code
        self.branch_count: int = branch_count
        super().__init__(
            detail=(
                f"Cannot delete headquarter SWIFT code {swift_code} "
                f"while {branch_count} branches exist."
            )
        )


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    400 Bad Request exception.
    Raised when input is semantically inconsistent beyond what Pydantic
    validation catches (e.g. isHeadquarter not matching the "XXX" suffix).

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InternalError(HTTPException):
    """500 Internal Server Error 예외 — 논리/동시성 이상 상황.

    Raised when the store behaves inconsistently with a prior check, such as a
    delete removing zero rows right after the record was found.

    Args:
        detail: 오류 메시지 (Error message, default: "Internal server error")
    """

    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
