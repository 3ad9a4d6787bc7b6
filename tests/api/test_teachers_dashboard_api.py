NEW_TEACHER = {
    "email": "maths@school.com",
    "password": "secret123",
    "name": "Maths Teacher",
    "employeeId": "T200",
    "phoneNumber": "5550200",
    "qualification": "M.Sc",
}


class TestTeachers:
    def test_create_and_get(self, client, admin_headers):
        response = client.post("/api/teachers", headers=admin_headers, json=NEW_TEACHER)

        assert response.status_code == 201
        created = response.json()["data"]
        assert created["employeeId"] == "T200"
        assert created["user"]["name"] == "Maths Teacher"
        assert created["user"]["role"] == "TEACHER"

        response = client.get(f"/api/teachers/{created['id']}", headers=admin_headers)
        assert response.json()["data"]["qualification"] == "M.Sc"

    def test_duplicate_employee_id(self, client, admin_headers, teacher):
        response = client.post(
            "/api/teachers",
            headers=admin_headers,
            json={**NEW_TEACHER, "employeeId": "T001"},
        )

        assert response.status_code == 409
        assert response.json() == {"error": "Employee ID already exists"}

    def test_update_account_and_profile_fields(self, client, admin_headers, teacher):
        response = client.put(
            f"/api/teachers/{teacher.id}",
            headers=admin_headers,
            json={"name": "Renamed", "qualification": "PhD"},
        )

        data = response.json()["data"]
        assert data["user"]["name"] == "Renamed"
        assert data["qualification"] == "PhD"

    def test_deactivated_teacher_is_locked_out(self, client, admin_headers, teacher, teacher_headers):
        response = client.delete(f"/api/teachers/{teacher.id}", headers=admin_headers)
        assert response.json() == {"data": {"message": "Teacher deactivated successfully"}}

        response = client.get("/api/auth/profile", headers=teacher_headers)
        assert response.status_code == 401
        assert response.json() == {"error": "User not found or inactive"}

    def test_assign_list_and_remove_class(self, client, admin_headers, teacher, make_class):
        school_class = make_class("Grade 1")
        path = f"/api/teachers/{teacher.id}/assign-class"

        response = client.post(
            path,
            headers=admin_headers,
            json={"classId": school_class.id, "subject": "Maths", "isPrimary": True},
        )
        assert response.status_code == 201
        assignment = response.json()["data"]
        assert assignment["class"]["name"] == "Grade 1"
        assert assignment["teacher"]["employeeId"] == "T001"

        again = client.post(path, headers=admin_headers, json={"classId": school_class.id})
        assert again.status_code == 409

        classes = client.get(f"/api/teachers/{teacher.id}/classes", headers=admin_headers)
        assert [a["classId"] for a in classes.json()["data"]] == [school_class.id]

        removed = client.delete(
            f"/api/teachers/{teacher.id}/remove-class/{school_class.id}", headers=admin_headers
        )
        assert removed.status_code == 200
        missing = client.delete(
            f"/api/teachers/{teacher.id}/remove-class/{school_class.id}", headers=admin_headers
        )
        assert missing.status_code == 404

    def test_my_classes_lists_active_students(
        self, client, admin_headers, teacher_headers, teacher, make_class, make_student
    ):
        school_class = make_class("Grade 1")
        make_student(school_class, "G1-002")
        make_student(school_class, "G1-001")
        make_student(school_class, "G1-003", is_active=False)
        client.post(
            f"/api/teachers/{teacher.id}/assign-class",
            headers=admin_headers,
            json={"classId": school_class.id},
        )

        response = client.get("/api/teachers/my-classes", headers=teacher_headers)

        assert response.status_code == 200
        (assignment,) = response.json()["data"]
        students = assignment["class"]["students"]
        assert [s["rollNumber"] for s in students] == ["G1-001", "G1-002"]

    def test_my_classes_is_for_teachers(self, client, admin_headers):
        response = client.get("/api/teachers/my-classes", headers=admin_headers)

        assert response.status_code == 403


class TestDashboard:
    def test_stats_on_empty_database(self, client, admin_headers):
        response = client.get("/api/dashboard/stats", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["collectionRate"] == 0.0
        assert data["paymentStatusBreakdown"] == {"paid": 0, "pending": 0, "overdue": 0}

    def test_monthly_trend_has_twelve_months(self, client, teacher_headers):
        response = client.get(
            "/api/dashboard/monthly-trend", headers=teacher_headers, params={"year": 2025}
        )

        data = response.json()["data"]
        assert data["year"] == 2025
        assert len(data["monthlyData"]) == 12

    def test_class_wise_and_payment_modes(self, client, admin_headers, make_class, make_student):
        grade_one = make_class("Grade 1", tuition_fee=1000)
        make_student(grade_one, "G1-001", tuition_fee=1000)
        generated = client.post(
            "/api/fee-records/generate",
            headers=admin_headers,
            json={"month": "March", "year": 2025},
        ).json()["data"]
        client.post(
            f"/api/fee-records/{generated['records'][0]['id']}/payment",
            headers=admin_headers,
            json={"amountPaid": 1000, "paymentMode": "Cheque"},
        )

        class_wise = client.get(
            "/api/dashboard/class-wise",
            headers=admin_headers,
            params={"month": "March", "year": 2025},
        ).json()["data"]
        assert class_wise == [
            {
                "className": "Grade 1",
                "totalStudents": 1,
                "totalCollected": 1000.0,
                "totalExpected": 1000.0,
                "totalPending": 0.0,
                "monthlyFee": 1000.0,
            }
        ]

        modes = client.get("/api/dashboard/payment-modes", headers=admin_headers).json()["data"]
        cheque = next(m for m in modes["paymentModeData"] if m["mode"] == "Cheque")
        assert cheque["count"] == 1
        assert modes["summary"]["totalAmount"] == 1000.0

    def test_requires_authentication(self, client):
        response = client.get("/api/dashboard/stats")

        assert response.status_code == 401
