"""Tests for composite-key deduplication."""

from leadmerge.pipeline.dedupe import dedupe_key, deduplicate


def test_first_seen_lead_survives(make_lead):
    first = make_lead(email="sam@acme.io", company_name="Acme", provenance=["profile:0"])
    second = make_lead(email="SAM@acme.io", company_name="Acme Corporation", provenance=["profile:1"])
    other = make_lead(email="alex@zephyr.co", provenance=["profile:2"])

    unique = deduplicate([first, second, other])

    assert [lead.provenance for lead in unique] == [["profile:0"], ["profile:2"]]
    assert unique[0].company_name == "Acme"


def test_key_joins_present_values_lowercased(make_lead):
    lead = make_lead(email="Sam@Acme.io", website="https://www.ACME.io")
    assert dedupe_key(lead, ["email", "domain"]) == "sam@acme.io::acme.io"


def test_key_skips_missing_values(make_lead):
    lead = make_lead(website="acme.io")
    assert dedupe_key(lead, ["email", "domain"]) == "acme.io"


def test_leads_without_any_key_are_all_kept(make_lead):
    leads = [make_lead(company_name="A"), make_lead(company_name="B")]
    assert len(deduplicate(leads)) == 2


def test_same_domain_different_email_kept(make_lead):
    leads = [
        make_lead(email="sam@acme.io"),
        make_lead(email="alex@acme.io"),
    ]
    assert len(deduplicate(leads)) == 2


def test_custom_key_fields(make_lead):
    leads = [
        make_lead(phone="+15125551234", email="a@acme.io"),
        make_lead(phone="+15125551234", email="b@acme.io"),
    ]
    assert len(deduplicate(leads, ["phone"])) == 1


def test_empty_input():
    assert deduplicate([]) == []
