"""Tests for job board adapters and the adapter factory.

Pages are served from inline HTML through a mocked requests session, so no
test touches the network.
"""

from unittest.mock import Mock, patch

import pytest
import requests

from jobalert.adapters import (
    ADAPTER_REGISTRY,
    AdapterConfigurationError,
    CutshortAdapter,
    GlassdoorAdapter,
    IndeedAdapter,
    LinkedInAdapter,
    MonsterAdapter,
    NaukriAdapter,
    build_adapters,
    get_adapter,
)
from jobalert.config.models import AdvancedConfig, SourceConfig
from jobalert.domain.models import FilterCriteria

INDEED_HTML = """
<html><body>
  <div class="job_seen_beacon">
    <h2 class="jobTitle"><a href="/viewjob?jk=abc123&amp;from=serp">React Developer</a></h2>
    <span class="companyName">Acme Labs</span>
    <div class="job-snippet">Build   dashboards with Tailwind.</div>
    <div class="salary-snippet-container">₹45,000 a month</div>
  </div>
  <div class="job_seen_beacon">
    <h2 class="jobTitle"><a href="/viewjob?jk=def456">Java Backend Engineer</a></h2>
    <span class="companyName">Globex</span>
    <div class="job-snippet">Spring Boot services.</div>
  </div>
  <div class="job_seen_beacon">
    <h2 class="jobTitle"><a href="/viewjob?jk=ghi789">Frontend Engineer</a></h2>
  </div>
</body></html>
"""

NAUKRI_HTML = """
<article class="jobTuple">
  <a class="title" href="https://www.naukri.com/job-listings-frontend-developer-123">Frontend Developer</a>
  <a class="subTitle">Initech</a>
  <span class="experience">2-5 years</span>
  <span class="salary">₹6,00,000 - 9,00,000 PA</span>
  <div class="job-desc">React, Redux</div>
</article>
"""

CUTSHORT_HTML = """
<div class="job-card">
  <a href="/job/react-dev-xyz"><span class="job-title">React Dev</span></a>
  <span class="company-name">Hooli</span>
  <span class="experience">3+ years</span>
</div>
"""

GLASSDOOR_HTML = """
<li class="jl">
  <a class="jobLink" href="/partner/jobListing.htm?jobListingId=99">UI Engineer (React)</a>
  <div class="jobEmpolyerName">Umbrella</div>
  <span class="salaryEstimate">₹8,00,000</span>
</li>
"""

MONSTER_HTML = """
<section class="card-content">
  <h3 class="medium"><a href="https://www.monsterindia.com/job/frontend-7">Frontend Lead</a></h3>
  <div class="company">Stark</div>
  <span class="exp">5 years</span>
  <span class="package">Not disclosed</span>
</section>
"""

LINKEDIN_HTML = """
<ul>
  <li class="result-card">
    <a href="https://www.linkedin.com/jobs/view/1/?refId=a"><h3>React Engineer</h3></a>
    <h4>Wayne</h4>
    <p class="result-card__snippet">Remote friendly</p>
  </li>
</ul>
<div class="base-card">
  <a class="base-card__full-link" href="https://www.linkedin.com/jobs/view/2/?trackingId=b"></a>
  <h3 class="base-search-card__title">Frontend Developer</h3>
  <h4 class="base-search-card__subtitle">Oscorp</h4>
  <span class="job-search-card__location">Chennai</span>
</div>
"""


def mock_session(text: str = "", status_code: int = 200, side_effect=None) -> Mock:
    session = Mock()
    if side_effect is not None:
        session.get.side_effect = side_effect
    else:
        session.get.return_value = Mock(status_code=status_code, text=text, reason="OK")
    return session


class TestIndeedAdapter:
    def test_build_search_url(self, criteria):
        adapter = IndeedAdapter(session=mock_session())
        assert (
            adapter.build_search_url(criteria)
            == "https://in.indeed.com/jobs?q=react+frontend&l=Chennai"
        )

    def test_fetch_parses_and_prefilters(self, criteria):
        session = mock_session(INDEED_HTML)
        postings = IndeedAdapter(session=session).fetch(criteria)

        assert len(postings) == 1
        posting = postings[0]
        assert posting.title == "React Developer"
        assert posting.company == "Acme Labs"
        assert posting.source == "Indeed"
        assert posting.url == "https://in.indeed.com/viewjob?jk=abc123&from=serp"
        assert posting.identity == "https://in.indeed.com/viewjob?jk=abc123"
        assert posting.snippet == "Build dashboards with Tailwind."
        assert posting.salary_text == "₹45,000 a month"
        assert posting.experience_text is None
        session.get.assert_called_once_with(
            "https://in.indeed.com/jobs?q=react+frontend&l=Chennai", timeout=20
        )

    def test_keyword_match_on_snippet(self):
        criteria = FilterCriteria(keywords=["spring"])
        postings = IndeedAdapter(session=mock_session(INDEED_HTML)).fetch(criteria)
        assert [p.company for p in postings] == ["Globex"]


class TestBoardAdapters:
    def test_naukri(self, criteria):
        adapter = NaukriAdapter(session=mock_session(NAUKRI_HTML))
        assert (
            adapter.build_search_url(criteria)
            == "https://www.naukri.com/react-frontend-jobs-in-chennai"
        )
        [posting] = adapter.fetch(criteria)
        assert posting.company == "Initech"
        assert posting.experience_text == "2-5 years"
        assert posting.salary_text == "₹6,00,000 - 9,00,000 PA"

    def test_naukri_url_without_location(self):
        adapter = NaukriAdapter(session=mock_session())
        url = adapter.build_search_url(FilterCriteria(keywords=["react native"]))
        assert url == "https://www.naukri.com/react-native-jobs"

    def test_cutshort_resolves_relative_links(self, criteria):
        [posting] = CutshortAdapter(session=mock_session(CUTSHORT_HTML)).fetch(criteria)
        assert posting.url == "https://cutshort.io/job/react-dev-xyz"
        assert posting.experience_text == "3+ years"

    def test_glassdoor(self, criteria):
        [posting] = GlassdoorAdapter(session=mock_session(GLASSDOOR_HTML)).fetch(criteria)
        assert posting.title == "UI Engineer (React)"
        assert posting.company == "Umbrella"
        assert posting.url.startswith("https://www.glassdoor.co.in/partner/")

    def test_monster(self, criteria):
        adapter = MonsterAdapter(session=mock_session(MONSTER_HTML))
        assert adapter.build_search_url(criteria).endswith("/search/react-frontend-jobs-in-chennai")
        [posting] = adapter.fetch(criteria)
        assert posting.experience_text == "5 years"
        assert posting.salary_text == "Not disclosed"

    def test_linkedin_both_layouts(self, criteria):
        postings = LinkedInAdapter(session=mock_session(LINKEDIN_HTML)).fetch(criteria)
        assert [p.company for p in postings] == ["Wayne", "Oscorp"]
        assert [p.identity for p in postings] == [
            "https://www.linkedin.com/jobs/view/1",
            "https://www.linkedin.com/jobs/view/2",
        ]


class TestFetchErrorIsolation:
    """fetch() never raises; every failure yields an empty list."""

    @pytest.mark.parametrize(
        "side_effect",
        [
            requests.exceptions.Timeout("slow"),
            requests.exceptions.ConnectionError("refused"),
        ],
    )
    def test_network_errors(self, criteria, side_effect):
        adapter = IndeedAdapter(session=mock_session(side_effect=side_effect))
        assert adapter.fetch(criteria) == []

    def test_http_error_status(self, criteria):
        adapter = GlassdoorAdapter(session=mock_session("Forbidden", status_code=403))
        assert adapter.fetch(criteria) == []

    def test_empty_body(self, criteria):
        assert NaukriAdapter(session=mock_session("   ")).fetch(criteria) == []

    def test_unexpected_parse_error(self, criteria):
        adapter = IndeedAdapter(session=mock_session(INDEED_HTML))
        with patch.object(IndeedAdapter, "parse_postings", side_effect=RuntimeError("boom")):
            assert adapter.fetch(criteria) == []

    def test_page_without_cards(self, criteria):
        assert IndeedAdapter(session=mock_session("<html></html>")).fetch(criteria) == []


class TestBaseAdapterSettings:
    def test_invalid_timeout(self):
        with pytest.raises(AdapterConfigurationError):
            IndeedAdapter(timeout=0, session=mock_session())

    def test_empty_user_agent(self):
        with pytest.raises(AdapterConfigurationError):
            IndeedAdapter(user_agent="  ", session=mock_session())

    def test_user_agent_header_set(self):
        session = Mock()
        session.headers = {}
        IndeedAdapter(user_agent="TestAgent/1.0", session=session)
        assert session.headers["User-Agent"] == "TestAgent/1.0"

    def test_max_postings_truncates(self):
        criteria = FilterCriteria(keywords=["engineer", "developer"])
        adapter = IndeedAdapter(max_postings=1, session=mock_session(INDEED_HTML))
        postings = adapter.fetch(criteria)
        assert [p.title for p in postings] == ["React Developer"]


class TestFactory:
    def test_registry_covers_every_source_type(self):
        assert set(ADAPTER_REGISTRY) == {
            "indeed", "naukri", "cutshort", "glassdoor", "monster", "linkedin"
        }

    def test_get_adapter_applies_advanced_settings(self):
        advanced = AdvancedConfig(http_request_timeout=30, max_postings_per_source=7)
        adapter = get_adapter(SourceConfig(type="naukri"), advanced, session=mock_session())
        assert isinstance(adapter, NaukriAdapter)
        assert adapter.timeout == 30
        assert adapter.max_postings == 7

    def test_unknown_type(self):
        with pytest.raises(AdapterConfigurationError, match="Unknown source type"):
            get_adapter(Mock(type="jobsdb"), AdvancedConfig())

    def test_build_adapters_keeps_order_and_skips_disabled(self):
        sources = [
            SourceConfig(type="linkedin"),
            SourceConfig(type="indeed", enabled=False),
            SourceConfig(type="cutshort"),
        ]
        adapters = build_adapters(sources, AdvancedConfig())
        assert [a.name for a in adapters] == ["LinkedIn", "Cutshort"]
