STUDENT = {
    "name": "Alice",
    "fatherName": "Arthur",
    "rollNumber": "G1-001",
    "phoneNumber": "5550100",
    "tuitionFee": 5000,
    "labFee": 500,
}


def create_class(client, headers, name="Grade 1"):
    response = client.post("/api/classes", headers=headers, json={"name": name})
    assert response.status_code == 201
    return response.json()["data"]


def create_student(client, headers, class_id, **overrides):
    response = client.post(
        "/api/students",
        headers=headers,
        json={**STUDENT, "classId": class_id, **overrides},
    )
    assert response.status_code == 201
    return response.json()["data"]


class TestClasses:
    def test_create_and_list(self, client, admin_headers):
        created = create_class(client, admin_headers)

        assert created["name"] == "Grade 1"
        assert created["isActive"] is True
        assert created["studentCount"] == 0

        response = client.get("/api/classes", headers=admin_headers)
        assert [c["id"] for c in response.json()["data"]] == [created["id"]]

    def test_teacher_cannot_create(self, client, teacher_headers):
        response = client.post("/api/classes", headers=teacher_headers, json={"name": "Grade 1"})

        assert response.status_code == 403
        assert response.json() == {"error": "Only admins can perform this action"}

    def test_duplicate_name(self, client, admin_headers):
        create_class(client, admin_headers)

        response = client.post("/api/classes", headers=admin_headers, json={"name": "Grade 1"})

        assert response.status_code == 409
        assert response.json() == {"error": "Class with this name already exists"}

    def test_detail_includes_students_and_fee_structure(self, client, admin_headers):
        school_class = create_class(client, admin_headers)
        create_student(client, admin_headers, school_class["id"])
        client.post(
            "/api/fee-structures",
            headers=admin_headers,
            json={"classId": school_class["id"], "tuitionFee": 5000, "labFee": 500},
        )

        response = client.get(f"/api/classes/{school_class['id']}", headers=admin_headers)

        data = response.json()["data"]
        assert data["studentCount"] == 1
        assert [s["rollNumber"] for s in data["students"]] == ["G1-001"]
        assert data["feeStructure"]["totalMonthlyFee"] == 5500

    def test_delete_class_with_students_is_rejected(self, client, admin_headers):
        school_class = create_class(client, admin_headers)
        create_student(client, admin_headers, school_class["id"])

        response = client.delete(f"/api/classes/{school_class['id']}", headers=admin_headers)

        assert response.status_code == 400

    def test_null_name_on_update_keeps_name(self, client, admin_headers):
        school_class = create_class(client, admin_headers)

        response = client.put(
            f"/api/classes/{school_class['id']}",
            headers=admin_headers,
            json={"name": None, "description": "Morning shift"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Grade 1"
        assert data["description"] == "Morning shift"

    def test_unknown_class(self, client, admin_headers):
        response = client.get("/api/classes/999", headers=admin_headers)

        assert response.status_code == 404
        assert response.json() == {"error": "Class not found"}


class TestFeeStructures:
    def test_create_lookup_by_class_and_update(self, client, admin_headers):
        school_class = create_class(client, admin_headers)

        response = client.post(
            "/api/fee-structures",
            headers=admin_headers,
            json={"classId": school_class["id"], "tuitionFee": 3000, "examFee": 200},
        )
        assert response.status_code == 201
        structure = response.json()["data"]
        assert structure["totalMonthlyFee"] == 3200

        response = client.get(
            f"/api/fee-structures/class/{school_class['id']}", headers=admin_headers
        )
        assert response.json()["data"]["id"] == structure["id"]
        assert response.json()["data"]["class"]["name"] == "Grade 1"

        response = client.put(
            f"/api/fee-structures/{structure['id']}",
            headers=admin_headers,
            json={"examFee": 500},
        )
        assert response.json()["data"]["totalMonthlyFee"] == 3500

    def test_negative_component_is_rejected(self, client, admin_headers):
        school_class = create_class(client, admin_headers)

        response = client.post(
            "/api/fee-structures",
            headers=admin_headers,
            json={"classId": school_class["id"], "tuitionFee": -1},
        )

        assert response.status_code == 400


class TestStudents:
    def test_create_returns_total_and_class(self, client, admin_headers):
        school_class = create_class(client, admin_headers)

        student = create_student(client, admin_headers, school_class["id"])

        assert student["totalMonthlyFee"] == 5500
        assert student["class"]["name"] == "Grade 1"
        assert student["isActive"] is True

    def test_duplicate_roll_number(self, client, admin_headers):
        school_class = create_class(client, admin_headers)
        create_student(client, admin_headers, school_class["id"])

        response = client.post(
            "/api/students",
            headers=admin_headers,
            json={**STUDENT, "classId": school_class["id"]},
        )

        assert response.status_code == 409
        assert response.json() == {"error": "Roll number already exists"}

    def test_list_filters(self, client, admin_headers):
        grade_one = create_class(client, admin_headers, "Grade 1")
        grade_two = create_class(client, admin_headers, "Grade 2")
        first = create_student(client, admin_headers, grade_one["id"])
        create_student(client, admin_headers, grade_two["id"], rollNumber="G2-001")

        response = client.get(
            "/api/students",
            headers=admin_headers,
            params={"classId": grade_one["id"], "isActive": "true"},
        )

        assert [s["id"] for s in response.json()["data"]] == [first["id"]]

    def test_update_recomputes_total(self, client, admin_headers):
        school_class = create_class(client, admin_headers)
        student = create_student(client, admin_headers, school_class["id"])

        response = client.put(
            f"/api/students/{student['id']}",
            headers=admin_headers,
            json={"labFee": 1000},
        )

        assert response.json()["data"]["totalMonthlyFee"] == 6000

    def test_delete_is_soft_and_permanent_delete_removes(self, client, admin_headers):
        school_class = create_class(client, admin_headers)
        student = create_student(client, admin_headers, school_class["id"])

        response = client.delete(f"/api/students/{student['id']}", headers=admin_headers)
        assert response.json() == {"data": {"message": "Student deleted successfully"}}
        detail = client.get(f"/api/students/{student['id']}", headers=admin_headers)
        assert detail.json()["data"]["isActive"] is False

        response = client.delete(
            f"/api/students/{student['id']}/permanent", headers=admin_headers
        )
        assert response.status_code == 200
        detail = client.get(f"/api/students/{student['id']}", headers=admin_headers)
        assert detail.status_code == 404

    def test_detail_has_fee_history(self, client, admin_headers):
        school_class = create_class(client, admin_headers)
        student = create_student(client, admin_headers, school_class["id"])
        client.post(
            "/api/fee-records/generate",
            headers=admin_headers,
            json={"month": "March", "year": 2025},
        )

        response = client.get(f"/api/students/{student['id']}", headers=admin_headers)

        data = response.json()["data"]
        assert [(r["month"], r["year"]) for r in data["feeRecords"]] == [("March", 2025)]
        assert data["attendances"] == []
