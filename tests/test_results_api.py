import json

import pytest

from apps.result.models import Result

URL = "/api/results/"


def post_json(client, body):
    return client.post(URL, data=json.dumps(body), content_type="application/json")


def entry(student, subject, **scores):
    data = {"studentId": student.pk, "subjectId": subject.pk,
            "internal": 20, "external": 50, "attendance": 5, "total": 75}
    data.update(scores)
    return data


def test_requires_login(client, db):
    assert client.get(URL).status_code == 401


def test_student_cannot_post(client, login, student, subject):
    login(student)
    response = post_json(client, {"results": [entry(student, subject)]})
    assert response.status_code == 403


def test_missing_results_array(client, login, teacher):
    login(teacher)
    response = post_json(client, {"rows": []})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request: results array is required"


def test_invalid_json_body(client, login, teacher):
    login(teacher)
    response = client.post(URL, data="{not json", content_type="application/json")
    assert response.status_code == 400


def test_invalid_entry_reports_details(client, login, teacher, student, subject):
    login(teacher)
    response = post_json(client, {"results": [entry(student, subject, internal=-1)]})
    body = response.json()
    assert response.status_code == 400
    assert body["error"] == "Invalid results data"
    assert "internal" in body["details"]["0"]


def test_duplicate_entries_in_one_batch_are_rejected(client, login, teacher, student, subject):
    login(teacher)
    response = post_json(client, {"results": [
        entry(student, subject, total=75),
        entry(student, subject, total=7),
    ]})
    body = response.json()

    assert response.status_code == 400
    assert list(body["details"]) == ["1"]
    assert not Result.objects.exists()


def test_unknown_student_is_404_and_nothing_is_saved(client, login, teacher, student, subject):
    login(teacher)
    ghost = {"studentId": student.pk + 100, "subjectId": subject.pk,
             "internal": 1, "external": 1, "attendance": 1, "total": 3}
    response = post_json(client, {"results": [entry(student, subject), ghost]})

    assert response.status_code == 404
    assert response.json()["error"] == "One or more students not found"
    assert not Result.objects.exists()


def test_upsert_creates_then_updates(client, login, teacher, student, subject):
    login(teacher)
    first = post_json(client, {"results": [entry(student, subject)]})
    assert first.status_code == 200
    assert first.json()["count"] == 1

    second = post_json(client, {"results": [entry(student, subject, total=90)]})
    body = second.json()
    assert body["success"] is True
    assert body["data"]["results"][0]["total"] == 90
    assert Result.objects.count() == 1


@pytest.mark.parametrize("field,value", [("studentId", "abc"), ("total", None), ("subjectId", 0)])
def test_entry_validation(field, value, client, login, teacher, student, subject):
    login(teacher)
    response = post_json(client, {"results": [entry(student, subject, **{field: value})]})
    assert response.status_code == 400


def test_parent_sees_only_wards_results(client, login, make_parent, make_student, parent, student, subject):
    other_parent = make_parent("other")
    other_child = make_student("otherchild", parent_profile=other_parent)
    Result.objects.create(student=student, subject=subject, internal=1, external=1, attendance=1, total=3)
    Result.objects.create(student=other_child, subject=subject, internal=2, external=2, attendance=2, total=6)

    login(parent)
    body = client.get(URL).json()

    assert body["count"] == 1
    assert body["data"]["results"][0]["studentId"] == student.pk
