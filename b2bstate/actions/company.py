"""
Company action tags and creators.
"""

from typing import Any, Dict, Iterable, Optional

from ..core.actions import Action, to_payload

FETCH_COMPANY_START = "company/fetchStart"
FETCH_COMPANY_SUCCESS = "company/fetchSuccess"
FETCH_COMPANY_FAILURE = "company/fetchFailure"
SET_CURRENT_COMPANY = "company/setCurrent"
SET_CURRENT_EMPLOYEE = "company/setCurrentEmployee"
LOAD_EMPLOYEES = "company/loadEmployees"
RESET_COMPANY_STATE = "company/reset"
CLEAR_COMPANY_ERROR = "company/clearError"

ACTION_TYPES = frozenset(
    {
        FETCH_COMPANY_START,
        FETCH_COMPANY_SUCCESS,
        FETCH_COMPANY_FAILURE,
        SET_CURRENT_COMPANY,
        SET_CURRENT_EMPLOYEE,
        LOAD_EMPLOYEES,
        RESET_COMPANY_STATE,
        CLEAR_COMPANY_ERROR,
    }
)


def fetch_company_start() -> Action:
    return Action(type=FETCH_COMPANY_START)


def fetch_company_success(company: Dict[str, Any], employee: Dict[str, Any]) -> Action:
    """Company and employee records loaded together."""
    return Action(type=FETCH_COMPANY_SUCCESS, payload={"company": company, "employee": employee})


def fetch_company_failure(error: str) -> Action:
    return Action(type=FETCH_COMPANY_FAILURE, payload={"error": error})


def set_current_company(company: Optional[Dict[str, Any]]) -> Action:
    return Action(type=SET_CURRENT_COMPANY, payload={"company": company})


def set_current_employee(employee: Optional[Dict[str, Any]]) -> Action:
    return Action(type=SET_CURRENT_EMPLOYEE, payload={"employee": employee})


def load_employees(employees: Iterable[Dict[str, Any]]) -> Action:
    return Action(type=LOAD_EMPLOYEES, payload={"employees": to_payload(list(employees))})


def reset_company_state() -> Action:
    return Action(type=RESET_COMPANY_STATE)


def clear_company_error() -> Action:
    return Action(type=CLEAR_COMPANY_ERROR)
