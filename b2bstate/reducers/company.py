"""
Company slice reducer.

is_b2b_active is recomputed whenever either half of the
(current_company, current_employee) pair can change. A fetch failure
forces it off even though stale records are kept.
"""

from dataclasses import replace

from ..actions import company as types
from ..core.actions import Action
from ..core.reducer import SliceReducer
from ..core.state import FAILED, LOADING, SUCCEEDED, CompanyState


def _is_active(company, employee) -> bool:
    return company is not None and employee is not None


def on_fetch_start(state: CompanyState, action: Action) -> CompanyState:
    return replace(state, status=LOADING, error=None)


def on_fetch_success(state: CompanyState, action: Action) -> CompanyState:
    payload = action.payload or {}
    return replace(
        state,
        current_company=payload.get("company"),
        current_employee=payload.get("employee"),
        status=SUCCEEDED,
        error=None,
        is_b2b_active=True,
        last_refreshed_at=action.ts,
    )


def on_fetch_failure(state: CompanyState, action: Action) -> CompanyState:
    payload = action.payload or {}
    return replace(state, status=FAILED, error=payload.get("error"), is_b2b_active=False)


def on_set_current_company(state: CompanyState, action: Action) -> CompanyState:
    company = (action.payload or {}).get("company")
    return replace(
        state,
        current_company=company,
        is_b2b_active=_is_active(company, state.current_employee),
        last_refreshed_at=action.ts if company is not None else state.last_refreshed_at,
    )


def on_set_current_employee(state: CompanyState, action: Action) -> CompanyState:
    employee = (action.payload or {}).get("employee")
    return replace(
        state,
        current_employee=employee,
        is_b2b_active=_is_active(state.current_company, employee),
    )


def on_load_employees(state: CompanyState, action: Action) -> CompanyState:
    employees = (action.payload or {}).get("employees") or ()
    return replace(state, employees=tuple(employees))


def on_reset(state: CompanyState, action: Action) -> CompanyState:
    return CompanyState.initial()


def on_clear_error(state: CompanyState, action: Action) -> CompanyState:
    return replace(state, error=None)


def register_handlers(reducer: SliceReducer) -> None:
    reducer.register(types.FETCH_COMPANY_START, on_fetch_start)
    reducer.register(types.FETCH_COMPANY_SUCCESS, on_fetch_success)
    reducer.register(types.FETCH_COMPANY_FAILURE, on_fetch_failure)
    reducer.register(types.SET_CURRENT_COMPANY, on_set_current_company)
    reducer.register(types.SET_CURRENT_EMPLOYEE, on_set_current_employee)
    reducer.register(types.LOAD_EMPLOYEES, on_load_employees)
    reducer.register(types.RESET_COMPANY_STATE, on_reset)
    reducer.register(types.CLEAR_COMPANY_ERROR, on_clear_error)


company_reducer = SliceReducer("company", CompanyState.initial)
register_handlers(company_reducer)
