import pytest

from app.constants.error_codes import ErrorCode
from app.core.exceptions import AppException
from app.schemas.users.user_schemas import UserCreateSchema, UserUpdateSchema
from app.utils.validators import collect_fields, validate_record


class TestCollectFields:
    def test_keeps_body_order(self):
        body = {"email": "b@x.com", "name": "B"}
        assert collect_fields(UserUpdateSchema, body) == ["email", "name"]

    def test_aliases_resolve_to_field_names(self):
        body = {"newPassword": "Newpass123", "oldPassword": "Secret123"}
        assert collect_fields(UserUpdateSchema, body) == ["new_password", "old_password"]

    def test_alias_and_name_are_deduplicated(self):
        body = {"oldPassword": "a", "old_password": "b"}
        assert collect_fields(UserUpdateSchema, body) == ["old_password"]

    def test_unknown_keys_are_dropped(self):
        body = {"role": "admin", "password": "plain", "name": "B"}
        assert collect_fields(UserUpdateSchema, body) == ["name"]

    def test_empty_body(self):
        assert collect_fields(UserUpdateSchema, {}) == []


class TestCreateSchema:
    def test_valid_record(self):
        record = validate_record(
            UserCreateSchema,
            {"name": " A ", "email": "a@x.com", "password": "Secret123"},
        )
        assert record.name == "A"
        assert record.email == "a@x.com"

    def test_email_is_kept_as_sent(self):
        record = validate_record(
            UserCreateSchema,
            {"name": "Ann", "email": "Ann@Example.COM", "password": "Secret123"},
        )
        assert record.email == "Ann@Example.COM"

    def test_password_limit_counts_bytes(self):
        # 38 characters, 74 bytes
        with pytest.raises(AppException) as exc:
            validate_record(
                UserCreateSchema,
                {"name": "A", "email": "a@x.com", "password": "\u00e9" * 36 + "a1"},
            )
        assert exc.value.error_code == ErrorCode.VALIDATION_ERROR

    def test_password_at_byte_limit_is_accepted(self):
        record = validate_record(
            UserCreateSchema,
            {"name": "A", "email": "a@x.com", "password": "\u00e9" * 35 + "a1"},
        )
        assert len(record.password.encode("utf-8")) == 72

    @pytest.mark.parametrize(
        "body",
        [
            {"email": "a@x.com", "password": "Secret123"},
            {"name": "A", "email": "not-an-email", "password": "Secret123"},
            {"name": "A", "email": "a@x.com", "password": "short1"},
            {"name": "A", "email": "a@x.com", "password": "onlyletters"},
            {"name": "   ", "email": "a@x.com", "password": "Secret123"},
        ],
    )
    def test_invalid_records(self, body):
        with pytest.raises(AppException) as exc:
            validate_record(UserCreateSchema, body)
        assert exc.value.error_code == ErrorCode.VALIDATION_ERROR

    def test_non_object_body_is_invalid(self):
        with pytest.raises(AppException):
            validate_record(UserCreateSchema, ["a", "b"])


class TestUpdateSchema:
    def test_partial_record(self):
        record = validate_record(UserUpdateSchema, {"name": "B"})
        assert record.model_fields_set == {"name"}

    def test_rotation_pair_required(self):
        with pytest.raises(AppException):
            validate_record(UserUpdateSchema, {"oldPassword": "Secret123"})
        with pytest.raises(AppException):
            validate_record(UserUpdateSchema, {"newPassword": "Newpass123"})

    def test_new_password_policy(self):
        with pytest.raises(AppException):
            validate_record(
                UserUpdateSchema,
                {"oldPassword": "Secret123", "newPassword": "weak"},
            )

    def test_explicit_null_is_invalid(self):
        with pytest.raises(AppException):
            validate_record(UserUpdateSchema, {"name": None})

    def test_empty_body_is_valid(self):
        record = validate_record(UserUpdateSchema, {})
        assert record.model_fields_set == set()

    def test_new_password_limit_counts_bytes(self):
        with pytest.raises(AppException):
            validate_record(
                UserUpdateSchema,
                {"oldPassword": "Secret123", "newPassword": "é" * 36 + "a1"},
            )

    def test_email_is_kept_as_sent(self):
        record = validate_record(UserUpdateSchema, {"email": "Bob@Example.COM"})
        assert record.email == "Bob@Example.COM"

    def test_invalid_email(self):
        with pytest.raises(AppException):
            validate_record(UserUpdateSchema, {"email": "not-an-email"})
