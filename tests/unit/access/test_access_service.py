from app.models.callsheet import Production
from app.services.access.access_service import authenticate, find_user, normalize_phone, sanitize


class TestNormalizePhone:

    def test_formatting_is_ignored(self):
        assert normalize_phone("(04) 12-345 678") == normalize_phone("0412345678") == "0412345678"

    def test_empty_input(self):
        assert normalize_phone(None) == ""
        assert normalize_phone("") == ""
        assert normalize_phone("ext. --") == ""


class TestFindUser:

    def test_matches_crew(self, sample_production):
        user = find_user(sample_production, "0412345678")
        assert user.name == "Alex Moreno"
        assert user.role == "Director"
        assert user.call_time == "6:00 AM"
        assert user.kind == "crew"

    def test_matches_cast(self, sample_production):
        user = find_user(sample_production, "+61-400-111-222")
        assert user.name == "Jordan Park"
        assert user.character == "Detective Ray"
        assert user.role is None
        assert user.kind == "cast"

    def test_crew_checked_before_cast(self, sample_production):
        sample_production.cast[0]["Phone"] = "0412 345 678"
        assert find_user(sample_production, "0412345678").kind == "crew"

    def test_first_match_wins(self, sample_production):
        sample_production.crew[1]["Phone"] = "0412345678"
        assert find_user(sample_production, "0412 345 678").name == "Alex Moreno"

    def test_no_match(self, sample_production):
        assert find_user(sample_production, "0499 999 999") is None

    def test_blank_phone_never_matches_blank_records(self):
        production = Production(id="p", crew=[{"Name": "No Phone", "Phone": ""}])
        assert find_user(production, "") is None
        assert find_user(production, None) is None


class TestSanitize:

    def test_removes_phone_numbers(self, sample_production):
        redacted = sanitize(sample_production)

        assert all("Phone" not in member for member in redacted.crew + redacted.cast)
        assert redacted.crew[0]["Name"] == "Alex Moreno"
        assert redacted.properties["closed_set"] is True

    def test_original_is_untouched(self, sample_production):
        sanitize(sample_production)
        assert sample_production.crew[0]["Phone"] == "0412 345 678"


class TestAuthenticate:

    def test_known_phone_gets_full_production(self, sample_production):
        result = authenticate(sample_production, "0412 345 678")

        assert result.authenticated is True
        assert result.user_info.name == "Alex Moreno"
        assert result.production.crew[0]["Phone"] == "0412 345 678"
        assert result.is_closed_set is True

    def test_unknown_phone_gets_sanitized_production(self, sample_production):
        assert sample_production.properties["closed_set"] is True

        result = authenticate(sample_production, "0499 999 999")

        assert result.authenticated is False
        assert result.user_info is None
        assert result.is_closed_set is False
        assert all("Phone" not in member for member in result.production.crew)
        assert result.production.properties["closed_set"] is True

    def test_open_set(self, sample_production):
        sample_production.properties["closed_set"] = False
        assert authenticate(sample_production, "0412345678").is_closed_set is False

    def test_serialized_shape(self, sample_production):
        payload = authenticate(sample_production, "(04) 9876-5432").model_dump(by_alias=True)
        assert payload["userInfo"]["callTime"] == "5:30 AM"
        assert payload["isClosedSet"] is True
        assert "gemData" in payload["production"]["locations"][0]
