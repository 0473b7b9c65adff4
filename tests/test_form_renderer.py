import os
import sys
import unittest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from entity_config import fields_for
from models.entity_schema import FieldDescriptor, FieldType
from services.form_renderer import collect_payload, render_form, validate_submission


def _input(form, name):
    return next(i for i in form.inputs if i.name == name)


class TestRenderForm(unittest.TestCase):
    def test_skips_id_and_non_editable_fields(self) -> None:
        fields = fields_for("students") + [FieldDescriptor(key="createdAt", label="Created", editable=False)]
        names = [i.name for i in render_form(fields).inputs]
        self.assertNotIn("id", names)
        self.assertNotIn("createdAt", names)
        self.assertEqual(names, ["firstName", "lastName", "email", "enrollmentDate", "major", "gpa"])

    def test_widgets_follow_data_type(self) -> None:
        form = render_form(fields_for("courses"))
        self.assertEqual(_input(form, "description").widget, "textarea")
        self.assertEqual(_input(form, "semester").widget, "select")
        self.assertEqual(_input(form, "credits").widget, "input")
        self.assertEqual(_input(form, "credits").input_type, FieldType.NUMBER)

    def test_required_marker(self) -> None:
        form = render_form(fields_for("students"))
        self.assertEqual(_input(form, "firstName").label, "First Name *")
        self.assertTrue(_input(form, "firstName").required)
        self.assertEqual(_input(form, "gpa").label, "GPA")
        self.assertFalse(_input(form, "gpa").required)

    def test_select_placeholder_and_preselection(self) -> None:
        form = render_form(fields_for("courses"), {"id": "1", "semester": "Spring"})
        options = _input(form, "semester").options
        self.assertEqual((options[0].value, options[0].text), ("", "Select Semester"))
        self.assertEqual([o.value for o in options[1:]], ["Fall", "Spring", "Summer"])
        self.assertEqual([o.value for o in options if o.selected], ["Spring"])
        self.assertEqual(_input(form, "semester").value, "Spring")

    def test_select_without_record_has_nothing_selected(self) -> None:
        options = _input(render_form(fields_for("courses")), "semester").options
        self.assertFalse(any(o.selected for o in options))

    def test_number_constraints_carried(self) -> None:
        gpa = _input(render_form(fields_for("students")), "gpa")
        self.assertEqual((gpa.min, gpa.max, gpa.step), (0, 4, 0.01))
        credits = _input(render_form(fields_for("courses")), "credits")
        self.assertEqual((credits.min, credits.max, credits.step), (1, 6, None))

    def test_prefill(self) -> None:
        record = {"id": "7", "firstName": "Ada", "lastName": "", "gpa": 0}
        form = render_form(fields_for("students"), record)
        self.assertEqual(_input(form, "firstName").value, "Ada")
        self.assertEqual(_input(form, "lastName").value, "")
        self.assertEqual(_input(form, "major").value, "")
        self.assertEqual(_input(form, "gpa").value, "0")

    def test_first_input_autofocused(self) -> None:
        form = render_form(fields_for("instructors"))
        self.assertEqual([i.name for i in form.inputs if i.autofocus], ["firstName"])


class TestValidateSubmission(unittest.TestCase):
    def setUp(self) -> None:
        self.course_form = render_form(fields_for("courses"))
        self.valid_course = {
            "courseCode": "CS101",
            "courseName": "Intro",
            "credits": "3",
            "department": "CS",
            "semester": "Fall",
            "description": "",
        }

    def test_valid_course(self) -> None:
        self.assertEqual(validate_submission(self.course_form, self.valid_course), [])

    def test_missing_required_field(self) -> None:
        data = dict(self.valid_course, courseCode="  ")
        self.assertEqual(validate_submission(self.course_form, data), ["Course Code is required"])

    def test_number_range(self) -> None:
        errors = validate_submission(self.course_form, dict(self.valid_course, credits="7"))
        self.assertEqual(errors, ["Credits must be at most 6"])
        errors = validate_submission(self.course_form, dict(self.valid_course, credits="0"))
        self.assertEqual(errors, ["Credits must be at least 1"])

    def test_number_without_step_must_be_whole(self) -> None:
        errors = validate_submission(self.course_form, dict(self.valid_course, credits="2.5"))
        self.assertEqual(errors, ["Credits must be a whole number"])

    def test_not_a_number(self) -> None:
        errors = validate_submission(self.course_form, dict(self.valid_course, credits="three"))
        self.assertEqual(errors, ["Credits must be a number"])

    def test_select_choice(self) -> None:
        errors = validate_submission(self.course_form, dict(self.valid_course, semester="Winter"))
        self.assertEqual(errors, ["Semester must be one of Fall, Spring, Summer"])

    def test_student_email_date_and_step(self) -> None:
        form = render_form(fields_for("students"))
        data = {
            "firstName": "Ada",
            "lastName": "Lovelace",
            "email": "not-an-email",
            "enrollmentDate": "09/01/2024",
            "major": "Math",
            "gpa": "3.755",
        }
        self.assertEqual(
            validate_submission(form, data),
            [
                "Email must be a valid email address",
                "Enrollment Date must be a date (YYYY-MM-DD)",
                "GPA must be a multiple of 0.01",
            ],
        )
        data.update(email="ada@example.com", enrollmentDate="2024-09-01", gpa="3.75")
        self.assertEqual(validate_submission(form, data), [])

    def test_email_must_be_a_bare_address(self) -> None:
        form = render_form(fields_for("students"))
        data = {
            "firstName": "Ada",
            "lastName": "Lovelace",
            "email": "Ada <ada@example.com>",
            "enrollmentDate": "2024-09-01",
            "major": "Math",
        }
        self.assertEqual(validate_submission(form, data), ["Email must be a valid email address"])
        data["email"] = "Ada@Example.COM"
        self.assertEqual(validate_submission(form, data), [])

    def test_blank_optional_fields_are_not_checked(self) -> None:
        form = render_form(fields_for("students"))
        data = {
            "firstName": "Ada",
            "lastName": "Lovelace",
            "email": "ada@example.com",
            "enrollmentDate": "2024-09-01",
            "major": "Math",
            "gpa": "",
        }
        self.assertEqual(validate_submission(form, data), [])


class TestCollectPayload(unittest.TestCase):
    def test_numbers_converted_and_text_stripped(self) -> None:
        form = render_form(fields_for("students"))
        payload = collect_payload(form, {"firstName": " Ada ", "gpa": "3.75", "major": None})
        self.assertEqual(payload["firstName"], "Ada")
        self.assertEqual(payload["gpa"], 3.75)
        self.assertEqual(payload["major"], "")
        self.assertNotIn("id", payload)

    def test_whole_numbers_stay_int_and_blank_numbers_are_null(self) -> None:
        course = collect_payload(render_form(fields_for("courses")), {"credits": "4"})
        self.assertEqual(course["credits"], 4)
        self.assertIsInstance(course["credits"], int)
        student = collect_payload(render_form(fields_for("students")), {"gpa": ""})
        self.assertIsNone(student["gpa"])


if __name__ == "__main__":
    unittest.main()
