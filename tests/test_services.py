import pytest

from crud_backend.errors import (
    InvalidTitleError,
    InvalidUsernameError,
    NotFoundError,
    TodoAlreadyCompletedError,
    UsernameDuplicateError,
)
from crud_backend.repositories import InMemoryTodoRepository, InMemoryUserRepository
from crud_backend.schemas import TodoUpdate, UserUpdate
from crud_backend.services import TodoService, UserService


@pytest.fixture
def todo_repo():
    return InMemoryTodoRepository()


@pytest.fixture
def todos(todo_repo):
    return TodoService(todo_repo)


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def users(user_repo):
    return UserService(user_repo)


class TestTodoService:
    def test_create_starts_not_completed_with_fresh_ids(self, todos):
        ids = []
        for title in ["a", "b", "c"]:
            todo = todos.create_todo(title, "desc")
            assert todo["completed"] is False
            assert todo["title"] == title
            ids.append(todo["id"])
        assert ids == sorted(ids)
        assert len(set(ids)) == 3

    @pytest.mark.parametrize("title", ["", "   ", "\t\n"])
    def test_create_rejects_blank_title(self, todos, todo_repo, title):
        with pytest.raises(InvalidTitleError):
            todos.create_todo(title)
        assert todo_repo.count() == 0

    def test_round_trip(self, todos):
        created = todos.create_todo("Read", "chapter 1")
        assert todos.get_todo(created["id"]) == created

    def test_get_missing_propagates_not_found(self, todos):
        with pytest.raises(NotFoundError):
            todos.get_todo(42)

    def test_update_partial_fields(self, todos):
        created = todos.create_todo("Old", "keep")
        updated = todos.update_todo(created["id"], TodoUpdate(title="New"))
        assert updated["title"] == "New"
        assert updated["description"] == "keep"
        assert updated["completed"] is False
        assert todos.get_todo(created["id"]) == updated

    def test_update_blank_title(self, todos):
        created = todos.create_todo("Old")
        with pytest.raises(InvalidTitleError):
            todos.update_todo(created["id"], TodoUpdate(title="  "))
        assert todos.get_todo(created["id"])["title"] == "Old"

    def test_complete_twice_fails_and_leaves_record(self, todos):
        created = todos.create_todo("Done soon")
        done = todos.update_todo(created["id"], TodoUpdate(completed=True))
        assert done["completed"] is True

        with pytest.raises(TodoAlreadyCompletedError):
            todos.update_todo(created["id"], TodoUpdate(completed=True, description="changed"))
        assert todos.get_todo(created["id"]) == done

    def test_uncomplete_allowed(self, todos):
        created = todos.create_todo("Flip")
        todos.update_todo(created["id"], TodoUpdate(completed=True))
        reopened = todos.update_todo(created["id"], TodoUpdate(completed=False))
        assert reopened["completed"] is False

    def test_omitted_completed_is_unchanged(self, todos):
        created = todos.create_todo("Stay done")
        todos.update_todo(created["id"], TodoUpdate(completed=True))
        updated = todos.update_todo(created["id"], TodoUpdate(description="more"))
        assert updated["completed"] is True

    def test_update_missing(self, todos):
        with pytest.raises(NotFoundError):
            todos.update_todo(7, TodoUpdate(title="x"))

    def test_delete_missing_keeps_size(self, todos, todo_repo):
        todos.create_todo("one")
        with pytest.raises(NotFoundError):
            todos.delete_todo(999)
        assert todo_repo.count() == 1

    def test_delete_then_list(self, todos):
        a = todos.create_todo("a")
        b = todos.create_todo("b")
        todos.delete_todo(a["id"])
        assert [t["id"] for t in todos.list_todos()] == [b["id"]]


class TestUserService:
    def test_create_and_round_trip(self, users):
        created = users.create_user("alice", "alice@example.com", "Alice")
        assert created["id"] == 1
        assert users.get_user(created["id"]) == created

    @pytest.mark.parametrize("username", ["", "  "])
    def test_blank_username(self, users, user_repo, username):
        with pytest.raises(InvalidUsernameError):
            users.create_user(username, "a@example.com", "A")
        assert user_repo.count() == 0

    @pytest.mark.parametrize("email", ["bob", "@example.com", "a b@example.com"])
    def test_email_stored_as_given(self, users, user_repo, email):
        created = users.create_user("bob", email, "Bob")
        assert created["email"] == email
        assert user_repo.get_by_username("bob") == created

    def test_duplicate_username_keeps_first(self, users, user_repo):
        first = users.create_user("carol", "carol@example.com", "Carol")
        with pytest.raises(UsernameDuplicateError):
            users.create_user("carol", "other@example.com", "Imposter")
        assert user_repo.count() == 1
        assert user_repo.get_by_username("carol") == first

    def test_update_email_only(self, users):
        created = users.create_user("dave", "dave@example.com", "Dave")
        updated = users.update_user(created["id"], UserUpdate(email="dave@new.example.com"))
        assert updated["email"] == "dave@new.example.com"
        assert updated["username"] == "dave"
        assert updated["name"] == "Dave"

    def test_update_empty_fields_unchanged(self, users):
        created = users.create_user("erin", "erin@example.com", "Erin")
        updated = users.update_user(created["id"], UserUpdate(email="", name=""))
        assert updated == created

    def test_update_email_without_at_sign(self, users):
        created = users.create_user("frank", "frank@example.com", "Frank")
        updated = users.update_user(created["id"], UserUpdate(email="frank"))
        assert updated["email"] == "frank"
        assert users.get_user(created["id"])["email"] == "frank"

    def test_update_missing(self, users):
        with pytest.raises(NotFoundError):
            users.update_user(3, UserUpdate(name="x"))

    def test_delete_missing_keeps_size(self, users, user_repo):
        users.create_user("gina", "gina@example.com", "Gina")
        with pytest.raises(NotFoundError):
            users.delete_user(99)
        assert user_repo.count() == 1
