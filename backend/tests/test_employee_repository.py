"""
Employee Records Backend — Employee Repository Unit Tests
==========================================================

What:  Tests for EmployeeRepository error mapping and storage calls.
How:   Uses mock DB sessions (no real DB); see test_employees_api.py for
       the same operations against SQLite.

What we test:
    ✅ Missing record raises NotFoundError
    ✅ Malformed id raises StorageError (SaveError on update), never NotFoundError
    ✅ Driver failures become StorageError / SaveError and roll back
    ✅ Search with no matches raises NotFoundError
    ✅ A refused connection (OSError) maps the same way as a driver error
"""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from app.exceptions import NotFoundError, SaveError, StorageError
from app.repositories.employee_repository import EmployeeRepository, escape_like
from app.services.employee_validator import normalize


def db_failure():
    return OperationalError("SELECT ...", {}, Exception("connection refused"))


def result_with(employee):
    result = MagicMock()
    result.scalar_one_or_none.return_value = employee
    return result


class TestCreate:

    @pytest.mark.asyncio
    async def test_create_adds_and_commits(self, mock_db_session, valid_employee_fields):
        repo = EmployeeRepository(mock_db_session)
        employee = await repo.create(normalize(valid_employee_fields))

        mock_db_session.add.assert_called_once_with(employee)
        mock_db_session.commit.assert_awaited_once()
        assert employee.emp_name == "Alice Smith"
        assert employee.experience == 3

    @pytest.mark.asyncio
    async def test_create_failure_raises_save_error(self, mock_db_session, valid_employee_fields):
        mock_db_session.commit = AsyncMock(side_effect=db_failure())
        repo = EmployeeRepository(mock_db_session)

        with pytest.raises(SaveError):
            await repo.create(normalize(valid_employee_fields))
        mock_db_session.rollback.assert_awaited_once()


class TestGetById:

    @pytest.mark.asyncio
    async def test_found(self, mock_db_session):
        employee = MagicMock()
        mock_db_session.execute.return_value = result_with(employee)

        result = await EmployeeRepository(mock_db_session).get_by_id(str(uuid4()))
        assert result is employee

    @pytest.mark.asyncio
    async def test_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = result_with(None)

        with pytest.raises(NotFoundError, match="Employee not found"):
            await EmployeeRepository(mock_db_session).get_by_id(str(uuid4()))

    @pytest.mark.asyncio
    async def test_malformed_id_is_storage_error(self, mock_db_session):
        with pytest.raises(StorageError, match="Invalid employee id 'not-a-uuid'"):
            await EmployeeRepository(mock_db_session).get_by_id("not-a-uuid")
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_query_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=db_failure())

        with pytest.raises(StorageError) as exc_info:
            await EmployeeRepository(mock_db_session).get_by_id(str(uuid4()))
        assert not isinstance(exc_info.value, SaveError)


class TestUpdate:

    @pytest.mark.asyncio
    async def test_overwrites_every_field(self, mock_db_session, valid_employee_fields):
        employee = MagicMock()
        mock_db_session.execute.return_value = result_with(employee)
        valid_employee_fields.update(emp_name="Bob Jones", experience=9, dept_code="OPS")

        result = await EmployeeRepository(mock_db_session).update(
            str(uuid4()), normalize(valid_employee_fields)
        )

        assert result is employee
        assert employee.emp_name == "Bob Jones"
        assert employee.experience == 9
        assert employee.dept_code == "OPS"
        assert employee.emp_email == "a@x.com"
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_not_found(self, mock_db_session, valid_employee_fields):
        mock_db_session.execute.return_value = result_with(None)

        with pytest.raises(NotFoundError):
            await EmployeeRepository(mock_db_session).update(
                str(uuid4()), normalize(valid_employee_fields)
            )
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_malformed_id_is_save_error(self, mock_db_session, valid_employee_fields):
        with pytest.raises(SaveError):
            await EmployeeRepository(mock_db_session).update(
                "123", normalize(valid_employee_fields)
            )


class TestDelete:

    @pytest.mark.asyncio
    async def test_deletes_and_commits(self, mock_db_session):
        employee = MagicMock()
        mock_db_session.execute.return_value = result_with(employee)

        await EmployeeRepository(mock_db_session).delete_by_id(str(uuid4()))

        mock_db_session.delete.assert_awaited_once_with(employee)
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = result_with(None)

        with pytest.raises(NotFoundError):
            await EmployeeRepository(mock_db_session).delete_by_id(str(uuid4()))
        mock_db_session.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_commit_failure(self, mock_db_session):
        mock_db_session.execute.return_value = result_with(MagicMock())
        mock_db_session.commit = AsyncMock(side_effect=db_failure())

        with pytest.raises(StorageError, match="Could not delete the employee"):
            await EmployeeRepository(mock_db_session).delete_by_id(str(uuid4()))
        mock_db_session.rollback.assert_awaited_once()


class TestListAndSearch:

    @pytest.mark.asyncio
    async def test_list_all(self, mock_db_session):
        employees = [MagicMock(), MagicMock()]
        result = MagicMock()
        result.scalars.return_value.all.return_value = employees
        mock_db_session.execute.return_value = result

        assert await EmployeeRepository(mock_db_session).list_all() == employees

    @pytest.mark.asyncio
    async def test_list_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=db_failure())

        with pytest.raises(StorageError, match="Could not retrieve employees"):
            await EmployeeRepository(mock_db_session).list_all()

    @pytest.mark.asyncio
    async def test_search_no_matches(self, mock_db_session):
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = result

        with pytest.raises(NotFoundError, match="No employees found"):
            await EmployeeRepository(mock_db_session).search_by_name("bob")

    def test_escape_like(self):
        assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


class TestUnreachableStore:
    """A refused connection surfaces from the driver as an OSError."""

    @pytest.mark.asyncio
    async def test_create_refused_is_save_error(self, mock_db_session, valid_employee_fields):
        mock_db_session.commit = AsyncMock(side_effect=ConnectionRefusedError())

        with pytest.raises(SaveError, match="Could not save the employee"):
            await EmployeeRepository(mock_db_session).create(normalize(valid_employee_fields))

    @pytest.mark.asyncio
    async def test_update_refused_is_save_error(self, mock_db_session, valid_employee_fields):
        mock_db_session.execute = AsyncMock(side_effect=ConnectionRefusedError())

        with pytest.raises(SaveError, match="Could not save the employee"):
            await EmployeeRepository(mock_db_session).update(
                str(uuid4()), normalize(valid_employee_fields)
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "call, message",
        [
            (lambda repo: repo.list_all(), "Could not retrieve employees"),
            (lambda repo: repo.get_by_id(str(uuid4())), "Could not retrieve the employee"),
            (lambda repo: repo.delete_by_id(str(uuid4())), "Could not delete the employee"),
            (lambda repo: repo.search_by_name("ali"), "Could not search employees"),
        ],
    )
    async def test_reads_refused_are_storage_errors(self, mock_db_session, call, message):
        mock_db_session.execute = AsyncMock(side_effect=ConnectionRefusedError())

        with pytest.raises(StorageError, match=message) as exc_info:
            await call(EmployeeRepository(mock_db_session))
        assert not isinstance(exc_info.value, SaveError)
