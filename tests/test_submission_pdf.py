from datetime import datetime

from bson import ObjectId
from reportlab.platypus import Paragraph

from easyform.services.pdf_renderer import (
    build_story,
    format_answer_value,
    format_timestamp,
    render_submission_pdf,
)

ANSWERS = [
    {"fieldId": "name", "label": "Full name", "type": "text", "value": "Ada <Lovelace>"},
    {"fieldId": "agree", "type": "checkbox", "value": False},
    {"fieldId": "notes", "label": "Notes", "type": "textarea", "value": None},
    {"type": "number", "value": 0},
]


def _texts(story):
    return [flowable.getPlainText() for flowable in story if isinstance(flowable, Paragraph)]


def test_format_answer_value():
    assert format_answer_value({"type": "checkbox", "value": True}) == "Yes"
    assert format_answer_value({"type": "checkbox", "value": ""}) == "No"
    assert format_answer_value({"type": "checkbox"}) == "No"
    assert format_answer_value({"type": "text", "value": None}) == ""
    assert format_answer_value({"type": "number", "value": 0}) == "0"
    assert format_answer_value({"value": ["a", "b"]}) == "['a', 'b']"


def test_format_timestamp():
    assert format_timestamp(datetime(2024, 3, 5, 14, 7, 9)) == "2024-03-05 14:07:09 UTC"
    assert format_timestamp(None) == ""


def test_story_lists_answers_in_stored_order():
    submission = {
        "_id": "sub1",
        "formId": "form_intake",
        "companyId": "c1",
        "answers": ANSWERS,
        "createdAt": datetime(2024, 3, 5, 14, 7, 9),
    }
    company = {"name": "Globex", "metadata": {"address": "1 Main St"}}
    form = {"title": "Intake"}

    texts = _texts(build_story(submission, company, form))

    assert texts[:6] == [
        "Globex",
        "1 Main St",
        "Intake",
        "Form ID: form_intake",
        "Submission ID: sub1",
        "Date: 2024-03-05 14:07:09 UTC",
    ]
    assert texts[7:] == [
        "Full name: Ada <Lovelace>",
        "agree: No",
        "Notes: ",
        "Field: 0",
    ]


def test_story_blank_header_when_company_missing():
    texts = _texts(build_story({"_id": "sub1", "formId": "f1", "answers": []}))

    assert texts[0] == ""
    assert texts[1] == ""
    assert texts[2] == "Form Submission"


def test_render_produces_pdf_bytes():
    content = render_submission_pdf({"_id": "sub1", "formId": "f1", "answers": ANSWERS * 40})
    assert content.startswith(b"%PDF")


def test_pdf_endpoint_streams_document(client, company_id):
    client.post("/api/forms", json={"title": "Intake"})
    created = client.post("/api/submissions", json={
        "companyId": company_id,
        "formId": "form_intake",
        "answers": ANSWERS,
    })
    submission_id = created.json()["id"]

    response = client.get("/api/submission-pdf", params={"id": submission_id})

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == f'inline; filename="easyform-{submission_id}.pdf"'
    assert response.content.startswith(b"%PDF")


def test_pdf_endpoint_tolerates_missing_company_and_form(client):
    created = client.post("/api/submissions", json={
        "companyId": str(ObjectId()),
        "formId": "form_gone",
        "answers": ANSWERS[:1],
    })

    response = client.get("/api/submission-pdf", params={"id": created.json()["id"]})

    assert response.status_code == 200
    assert response.content.startswith(b"%PDF")


def test_pdf_endpoint_unknown_submission_is_json_404(client):
    response = client.get("/api/submission-pdf", params={"id": str(ObjectId())})

    assert response.status_code == 404
    assert response.headers["content-type"].startswith("application/json")
    assert response.json()["error"] == "not_found"


def test_pdf_endpoint_requires_id(client):
    response = client.get("/api/submission-pdf")

    assert response.status_code == 400
    assert response.json()["error"] == "missing_id"


def test_pdf_endpoint_render_failure_is_json_500(client, monkeypatch):
    created = client.post("/api/submissions", json={"companyId": "c1", "formId": "f1", "answers": ANSWERS[:1]})

    def explode(*args, **kwargs):
        raise RuntimeError("font missing")

    monkeypatch.setattr("easyform.routes.submission_pdf.render_submission_pdf", explode)
    response = client.get("/api/submission-pdf", params={"id": created.json()["id"]})

    assert response.status_code == 500
    assert response.json() == {"error": "pdf_error", "message": "font missing"}


def test_pdf_endpoint_is_get_only(client):
    response = client.post("/api/submission-pdf", json={})
    assert response.status_code == 405
