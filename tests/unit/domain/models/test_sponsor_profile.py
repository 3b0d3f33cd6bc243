"""Unit tests for SponsorProfile aggregate."""

import pytest

from marketplace.domain.events.profile_events import (
    SponsorBudgetUpdated,
    SponsorHireRecorded,
    SponsorJobPostingClosed,
    SponsorJobPostingOpened,
)
from marketplace.domain.models.base import ValidationError
from marketplace.domain.models.exceptions import ArchivedProfileError, InvalidBudgetError
from marketplace.domain.models.profile_status import ProfileStatus
from marketplace.domain.models.sponsor_profile import (
    SponsorBasicInfoUpdate,
    SponsorBudgetUpdate,
    SponsorFamilyInfoUpdate,
    SponsorIdentityUpdate,
    SponsorPreferencesUpdate,
    SponsorProfile,
)


class TestSponsorProfileCreation:
    """Test sponsor profile construction."""

    def test_new_sponsor_defaults(self):
        """Test household defaults of a bare sponsor."""
        sponsor = SponsorProfile(id="s1", user_id="u3")

        assert sponsor.family_size == 1
        assert sponsor.children_count == 0
        assert sponsor.has_pets is False
        assert sponsor.live_in_required is True
        assert sponsor.currency == "USD"
        assert sponsor.has_valid_budget is False
        # family_size is the only required field filled by default
        assert sponsor.completion_percentage == 8

    def test_complete_sponsor(self, sponsor_factory):
        """Test the complete fixture scores 100."""
        sponsor = sponsor_factory()

        assert sponsor.completion_percentage == 100
        assert sponsor.has_valid_budget is True


class TestSponsorProfileUpdates:
    """Test sponsor partial updates."""

    def test_basic_info_includes_religion(self):
        """Test basic info carries the household religion."""
        sponsor = SponsorProfile(id="s1", user_id="u3")

        sponsor.update_basic_info(SponsorBasicInfoUpdate(full_name="Fatima", religion="Islam"))

        assert sponsor.religion == "Islam"
        assert sponsor.pull_domain_events()[0].type == "SponsorProfileUpdated"

    def test_archived_sponsor_rejects_basic_info(self, sponsor_factory):
        """Test basic info is read-only once archived."""
        sponsor = sponsor_factory(status=ProfileStatus.ARCHIVED)

        with pytest.raises(ArchivedProfileError):
            sponsor.update_basic_info(SponsorBasicInfoUpdate(city="Sharjah"))

    def test_archived_sponsor_accepts_budget(self, sponsor_factory):
        """Test the budget stays writable when archived."""
        sponsor = sponsor_factory(status=ProfileStatus.ARCHIVED)

        sponsor.update_budget(SponsorBudgetUpdate(salary_budget_max=800))

        assert sponsor.salary_budget_max == 800

    def test_family_info(self):
        """Test family details are applied."""
        sponsor = SponsorProfile(id="s1", user_id="u3")

        sponsor.update_family_info(SponsorFamilyInfoUpdate(
            family_size=4, children_count=2, children_ages=[3, 7], has_pets=False, accommodation_type="apartment"
        ))

        assert sponsor.family_size == 4
        assert sponsor.children_ages == [3, 7]
        assert sponsor.has_pets is False
        assert sponsor.pull_domain_events()[0].updated_fields == (
            "family_size", "children_count", "children_ages", "has_pets", "accommodation_type",
        )

    @pytest.mark.parametrize("changes,message", [
        ({"family_size": 0}, "Family size must be at least 1"),
        ({"children_count": -1}, "Children count cannot be negative"),
        ({"children_count": 1, "children_ages": [2, 5]}, "More children ages than children"),
        ({"children_count": 1, "children_ages": [-2]}, "Children ages cannot be negative"),
    ])
    def test_invalid_family_info(self, changes, message):
        """Test household consistency checks."""
        sponsor = SponsorProfile(id="s1", user_id="u3")
        before = sponsor.to_dict()

        with pytest.raises(ValidationError, match=message):
            sponsor.update_family_info(SponsorFamilyInfoUpdate(**changes))

        assert sponsor.to_dict() == before

    def test_preferences(self):
        """Test candidate preferences."""
        sponsor = SponsorProfile(id="s1", user_id="u3")

        sponsor.update_preferences(SponsorPreferencesUpdate(
            required_skills=["cooking"], preferred_languages=["Arabic", "English"], live_in_required=False
        ))

        assert sponsor.required_skills == ["cooking"]
        assert sponsor.live_in_required is False

    def test_negative_preferred_experience(self):
        """Test negative experience preference is rejected."""
        sponsor = SponsorProfile(id="s1", user_id="u3")

        with pytest.raises(ValidationError):
            sponsor.update_preferences(SponsorPreferencesUpdate(preferred_experience_years=-2))

    def test_budget_update(self):
        """Test budget bounds and the budget event payload."""
        sponsor = SponsorProfile(id="s1", user_id="u3")

        sponsor.update_budget(SponsorBudgetUpdate(salary_budget_min=300, salary_budget_max=500, currency="AED"))

        assert sponsor.has_valid_budget is True
        event = sponsor.pull_domain_events()[0]
        assert isinstance(event, SponsorBudgetUpdated)
        assert event.payload["salary_budget_min"] == 300
        assert event.payload["currency"] == "AED"

    def test_budget_merged_with_existing_bounds(self):
        """Test a single bound is checked against the stored one."""
        sponsor = SponsorProfile(id="s1", user_id="u3", salary_budget_max=500)

        with pytest.raises(InvalidBudgetError, match="Minimum budget cannot exceed maximum budget"):
            sponsor.update_budget(SponsorBudgetUpdate(salary_budget_min=600))

        assert sponsor.salary_budget_min is None

    def test_negative_budget(self):
        """Test negative bounds are rejected."""
        sponsor = SponsorProfile(id="s1", user_id="u3")

        with pytest.raises(InvalidBudgetError, match="cannot be negative"):
            sponsor.update_budget(SponsorBudgetUpdate(salary_budget_min=-1))

    def test_identity(self):
        """Test identity details count towards completion."""
        sponsor = SponsorProfile(id="s1", user_id="u3")
        before = sponsor.completion_percentage

        sponsor.update_identity(SponsorIdentityUpdate(id_type="emirates_id", id_number="784-1"))

        assert sponsor.id_number == "784-1"
        assert sponsor.completion_percentage > before


class TestSponsorProfileSubmission:
    """Test sponsor submission rules."""

    def test_inverted_budget_blocks_submission(self, sponsor_factory):
        """Test a reconstructed inverted budget cannot be submitted."""
        sponsor = sponsor_factory(salary_budget_min=700, salary_budget_max=500)
        assert sponsor.is_complete()

        with pytest.raises(InvalidBudgetError):
            sponsor.submit_for_verification()

        assert sponsor.status == ProfileStatus.DRAFT

    def test_complete_sponsor_submits(self, sponsor_factory):
        """Test a complete sponsor moves to review."""
        sponsor = sponsor_factory()

        sponsor.submit_for_verification()

        assert sponsor.pull_domain_events()[0].type == "SponsorProfileSubmitted"


class TestSponsorJobPostings:
    """Test job posting and hire counters."""

    def test_open_and_close(self):
        """Test the open posting counter."""
        sponsor = SponsorProfile(id="s1", user_id="u3")

        sponsor.open_job_posting("j1")
        sponsor.close_job_posting("j1")
        sponsor.close_job_posting("j1")

        assert sponsor.active_job_postings == 0
        events = sponsor.pull_domain_events()
        assert [type(e) for e in events] == [
            SponsorJobPostingOpened, SponsorJobPostingClosed, SponsorJobPostingClosed,
        ]
        assert [e.active_job_postings for e in events] == [1, 0, 0]

    def test_record_hire(self):
        """Test hires accumulate."""
        sponsor = SponsorProfile(id="s1", user_id="u3")

        sponsor.record_hire("m1")

        assert sponsor.total_hires == 1
        event = sponsor.pull_domain_events()[0]
        assert isinstance(event, SponsorHireRecorded)
        assert event.maid_id == "m1"

    def test_job_id_required(self):
        """Test a blank job reference is rejected."""
        sponsor = SponsorProfile(id="s1", user_id="u3")

        with pytest.raises(ValidationError, match="job_id is required"):
            sponsor.open_job_posting("")
