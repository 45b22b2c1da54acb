"""
Directory Store.

Top-level coordinator of the console.  Owns the loaded user collection,
the organisation filter options, the detail/delete selections and the
open create/edit form, and orchestrates the gateway, normaliser, filter
engine and form controller.

Collection lifecycle::

    EMPTY -> LOADING -> LOADED | ERROR      (LOADING re-entered on refresh)

Gateway faults never blank the displayed collection: a failed refresh
keeps the previous users visible, a failed delete keeps the dialog open.

Known behaviour, kept as-is:

* ``apply_filters`` with a non-empty filter narrows the *currently
  displayed* list, so successive different filters compound until the
  next refresh.  ``filter_from_snapshot=True`` filters the last fetched
  snapshot instead.
* Overlapping refreshes are not coalesced; the last response to resolve
  wins.
"""

from __future__ import annotations

from types import TracebackType
from typing import Optional

from directory_console.gateway.base import GatewayError, UserGateway
from directory_console.logger import StructuredLogger
from directory_console.models.enums import LoadStatus
from directory_console.models.filter_models import FilterState
from directory_console.models.service_models import ServiceResult
from directory_console.models.user import User
from directory_console.services.base_service import BaseService
from directory_console.services.filter_engine import visible
from directory_console.services.form_controller import FormController
from directory_console.services.organisation_index import build_organisation_index
from directory_console.services.response_normalizer import (
    normalize_user_list,
    normalize_user_record,
)

LOAD_USERS_ERROR: str = "Failed to load users"
LOAD_DETAILS_ERROR: str = "Failed to load user details"
DELETE_USER_ERROR: str = "Failed to delete user"


class DirectoryStore(BaseService):
    """Owned, injectable state container for one console session.

    Parameters
    ----------
    gateway:
        Remote gateway; the store closes it in :meth:`aclose`.
    logger:
        Structured logger instance.
    settle_delay_s:
        Settle delay handed to every form the store opens.
    filter_from_snapshot:
        Filter the last fetched snapshot instead of the displayed list.
    operator:
        Actor name written to audit lines.
    """

    def __init__(
        self,
        gateway: UserGateway,
        logger: StructuredLogger,
        settle_delay_s: float = 1.0,
        filter_from_snapshot: bool = False,
        operator: str = "console",
    ) -> None:
        super().__init__(logger, operator)
        self._gateway = gateway
        self._settle_delay_s = settle_delay_s
        self._filter_from_snapshot = filter_from_snapshot

        self._status: LoadStatus = LoadStatus.EMPTY
        self._users: list[User] = []
        self._snapshot: list[User] = []
        self._organisations: list[str] = []
        self._filter: FilterState = FilterState()
        self._error: Optional[str] = None

        self._selected_user: Optional[User] = None
        self._delete_target_id: Optional[str] = None
        self._form: Optional[FormController] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def mount(self) -> ServiceResult[list[User]]:
        """Initial load when the console is first shown."""
        self._logger.info("Mounting directory store.")
        return await self.refresh()

    async def aclose(self) -> None:
        """Tear down: drop the open form and release the gateway."""
        if self._form is not None:
            self._form.cancel()
            self._form = None
        await self._gateway.aclose()
        self._logger.info("Directory store closed.")

    async def __aenter__(self) -> "DirectoryStore":
        await self.mount()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def status(self) -> LoadStatus:
        return self._status

    @property
    def users(self) -> list[User]:
        """The displayed collection."""
        return list(self._users)

    @property
    def organisations(self) -> list[str]:
        """Organisation filter options."""
        return list(self._organisations)

    @property
    def filter_state(self) -> FilterState:
        return self._filter

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def is_busy(self) -> bool:
        """Loading with nothing to show yet."""
        return self._status == LoadStatus.LOADING and not self._users

    @property
    def selected_user(self) -> Optional[User]:
        return self._selected_user

    @property
    def detail_open(self) -> bool:
        return self._selected_user is not None

    @property
    def delete_target_id(self) -> Optional[str]:
        return self._delete_target_id

    @property
    def delete_dialog_open(self) -> bool:
        return self._delete_target_id is not None

    @property
    def form(self) -> Optional[FormController]:
        return self._form

    def clear_error(self) -> None:
        self._error = None

    # ------------------------------------------------------------------
    # Loading & filtering
    # ------------------------------------------------------------------

    async def refresh(
        self, filter_params: Optional[dict[str, str]] = None
    ) -> ServiceResult[list[User]]:
        """Fetch the collection and replace the loaded users.

        A successful fetch also clears the local filter, so ``filter_state``
        always describes the list on display.
        """
        self._status = LoadStatus.LOADING
        self._error = None

        try:
            raw = await self._gateway.list_users(filter_params)
        except GatewayError as exc:
            self._status = LoadStatus.ERROR
            self._error = LOAD_USERS_ERROR
            return self._gateway_fault(exc, LOAD_USERS_ERROR, "Loading users")

        users = normalize_user_list(raw, self._logger)
        self._users = users
        self._snapshot = list(users)
        self._organisations = build_organisation_index(self._snapshot)
        self._status = LoadStatus.LOADED
        # A fresh fetch is unfiltered locally.
        self._filter = FilterState()
        self._logger.info(
            "Loaded %d users across %d organisations.",
            len(users),
            len(self._organisations),
        )
        return ServiceResult(success=True, data=list(users))

    async def apply_filters(
        self, text: str = "", organisation: str = ""
    ) -> ServiceResult[list[User]]:
        """Apply the search term and organisation filter.

        Both empty means a full reload, not a filter over what is shown.
        """
        self._filter = FilterState(text=text, organisation=organisation)
        if self._filter.is_empty:
            return await self.refresh()

        source = self._snapshot if self._filter_from_snapshot else self._users
        self._users = visible(source, self._filter)
        self._logger.debug(
            "Filter text=%r organisation=%r -> %d users",
            self._filter.text,
            self._filter.organisation,
            len(self._users),
        )
        return ServiceResult(success=True, data=list(self._users))

    async def set_search_text(self, text: str) -> ServiceResult[list[User]]:
        """Change the search term, keeping the current organisation filter."""
        return await self.apply_filters(text, self._filter.organisation)

    async def set_organisation_filter(self, organisation: str) -> ServiceResult[list[User]]:
        """Change the organisation filter, keeping the current search term."""
        return await self.apply_filters(self._filter.text, organisation)

    # ------------------------------------------------------------------
    # Detail view
    # ------------------------------------------------------------------

    async def view_details(self, user_uid: str) -> ServiceResult[User]:
        """Fetch one record and open the detail view on success."""
        try:
            raw = await self._gateway.get_user(user_uid)
        except GatewayError as exc:
            self._error = LOAD_DETAILS_ERROR
            return self._gateway_fault(exc, LOAD_DETAILS_ERROR, f"Loading user {user_uid}")

        user = normalize_user_record(raw, self._logger)
        if user is None:
            self._error = LOAD_DETAILS_ERROR
            return ServiceResult(success=False, error=LOAD_DETAILS_ERROR, status_code=502)

        self._selected_user = user
        return ServiceResult(success=True, data=user)

    def close_details(self) -> None:
        self._selected_user = None

    # ------------------------------------------------------------------
    # Delete workflow
    # ------------------------------------------------------------------

    def request_delete(self, user_uid: str) -> None:
        """Open the confirmation dialog for *user_uid*; nothing is sent yet."""
        self._delete_target_id = user_uid

    def cancel_delete(self) -> None:
        self._delete_target_id = None

    async def confirm_delete(self) -> ServiceResult[str]:
        """Delete the confirmed target and drop it from the local collection.

        No refetch follows a successful delete.
        """
        target = self._delete_target_id
        if target is None:
            return ServiceResult(
                success=False,
                error="No user selected for deletion.",
                status_code=400,
            )

        try:
            await self._gateway.delete_user(target)
        except GatewayError as exc:
            self._error = DELETE_USER_ERROR
            return self._gateway_fault(exc, DELETE_USER_ERROR, f"Deleting user {target}")

        self._users = [u for u in self._users if u.user_uid != target]
        self._snapshot = [u for u in self._snapshot if u.user_uid != target]
        self._organisations = build_organisation_index(self._snapshot)
        self._delete_target_id = None
        self._error = None

        self._audit("DELETE", target)
        return ServiceResult(success=True, data=target)

    # ------------------------------------------------------------------
    # Create / edit form
    # ------------------------------------------------------------------

    def open_create_form(self) -> FormController:
        return self._open_form(None)

    def open_edit_form(self, user: User) -> FormController:
        return self._open_form(user)

    def close_form(self) -> None:
        if self._form is not None:
            self._form.cancel()
        self._form = None

    def _open_form(self, user: Optional[User]) -> FormController:
        form = FormController(
            gateway=self._gateway,
            logger=self._logger,
            settle_delay_s=self._settle_delay_s,
            on_success=lambda: self._on_form_saved(form),
            operator=self._operator,
        )
        form.load(user)
        self._form = form
        return form

    async def _on_form_saved(self, form: FormController) -> None:
        await self.refresh()
        if self._form is form:
            self._form = None
