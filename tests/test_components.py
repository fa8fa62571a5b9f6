from ui.components import record_heading_html, skipped_records_message, status_badge_html


def test_record_heading_escapes_user_text() -> None:
    badge = status_badge_html("Actif", "positive")
    heading = record_heading_html("<img src=x onerror=alert(1)>", badge, suffix=" · R&D")

    assert "<img" not in heading
    assert heading.startswith("**&lt;img src=x onerror=alert(1)&gt;**")
    assert " · R&amp;D " in heading
    assert heading.endswith(badge)


def test_record_heading_keeps_plain_names() -> None:
    badge = status_badge_html("Prospect")
    assert record_heading_html("Acme", badge) == f"**Acme** {badge}"


def test_skipped_records_message() -> None:
    assert skipped_records_message(0) is None
    assert skipped_records_message(2).startswith("2 enregistrement(s) invalide(s) ignoré(s)")
