import pytest

from faculty_portal.errors import NotFoundError, ValidationError
from faculty_portal.services import (
    create_department_event,
    create_faculty_event,
    get_department_profile,
    get_faculty_profile,
    get_owned_event,
    insert_department_events,
    list_departments,
    list_faculty,
    update_department_event,
    update_faculty_profile,
)

DEPARTMENT_EVENT = {
    'title': "Guest Lecture on IoT",
    'type': "Guest lecture",
    'coordinator_name': "Dr. Iyer",
    'from_date': "2024-09-10",
    'to_date': "2024-09-10",
    'location': "Seminar Hall",
    'attachments': "https://drive.example.com/iot",
    'certificate_link': "",
}


class TestFacultyEvents:
    def test_create(self, database, factory):
        faculty_id = factory.faculty()

        event = create_faculty_event(faculty_id, {
            'title': " AI Workshop ", 'event_role': 'Organized', 'type': 'Workshop',
            'participants': "35", 'attachments': ["https://files.example.com/a.jpg", ""],
        }, database)

        assert event['title'] == "AI Workshop"
        assert event['participants'] == 35
        assert event['attachments'] == ["https://files.example.com/a.jpg"]
        assert event['faculty_id'] == faculty_id

    @pytest.mark.parametrize("data, message", [
        ({'title': "", 'event_role': 'Organized'}, "Event title and role are required."),
        ({'title': "AI Workshop"}, "Event title and role are required."),
        ({'title': "AI Workshop", 'event_role': 'Hosted'}, "Event role must be one of"),
    ])
    def test_validation(self, database, factory, data, message):
        with pytest.raises(ValidationError, match=message):
            create_faculty_event(factory.faculty(), data, database)

    def test_attachment_limit(self, database, factory):
        urls = [f"https://files.example.com/{index}.jpg" for index in range(11)]

        with pytest.raises(ValidationError, match="maximum of 10"):
            create_faculty_event(factory.faculty(), {
                'title': "AI Workshop", 'event_role': 'Attended', 'attachments': urls
            }, database)

    def test_unknown_faculty(self, database):
        with pytest.raises(NotFoundError):
            create_faculty_event(99, {'title': "AI Workshop", 'event_role': 'Attended'}, database)


class TestDepartmentEvents:
    def test_create_defaults(self, database, factory):
        department_id = factory.department()

        event = create_department_event(department_id, DEPARTMENT_EVENT, database)

        assert event['participants'] == 0
        assert event['certificate_link'] is None
        assert event['attachments'] == "https://drive.example.com/iot"

    def test_required_fields(self, database, factory):
        with pytest.raises(ValidationError, match="Coordinator Name"):
            create_department_event(factory.department(), dict(DEPARTMENT_EVENT, location=""), database)

    def test_create_requires_drive_link(self, database, factory):
        with pytest.raises(ValidationError, match="drive link"):
            create_department_event(factory.department(), dict(DEPARTMENT_EVENT, attachments=""), database)

    def test_update_own_event(self, database, factory):
        department_id = factory.department()
        event_id = factory.department_event(department_id)

        updated = update_department_event(
            department_id, event_id, dict(DEPARTMENT_EVENT, title="Renamed", participants=12), database
        )

        assert updated['id'] == event_id
        assert updated['title'] == "Renamed"
        assert updated['participants'] == 12

    def test_update_other_departments_event(self, database, factory):
        owner = factory.department()
        other = factory.department("Mechanical")
        event_id = factory.department_event(owner)

        with pytest.raises(NotFoundError):
            update_department_event(other, event_id, DEPARTMENT_EVENT, database)

    def test_bulk_insert(self, database, factory):
        department_id = factory.department()
        rows = [dict(DEPARTMENT_EVENT, attachments=""), dict(DEPARTMENT_EVENT, title="Second")]

        events = insert_department_events(department_id, rows, database)

        assert [event['title'] for event in events] == ["Guest Lecture on IoT", "Second"]

    def test_bulk_insert_nothing(self, database, factory):
        with pytest.raises(ValidationError, match="No valid rows to import."):
            insert_department_events(factory.department(), [], database)

    def test_get_owned_event(self, database, factory):
        department_id = factory.department()
        event_id = factory.department_event(department_id)

        event = get_owned_event('department_events', 'department_id', department_id, event_id, database)

        assert event['title'] == "Hackathon 2024"
        with pytest.raises(NotFoundError):
            get_owned_event('department_events', 'department_id', department_id + 1, event_id, database)


class TestDirectory:
    def test_faculty_ordered_by_name_with_placeholders(self, database, factory):
        factory.faculty("Ravi Kumar", school="Engineering")
        factory.faculty("Asha Rao")

        listing = list_faculty(database)

        assert [row['name'] for row in listing] == ["Asha Rao", "Ravi Kumar"]
        assert listing[0]['school'] == 'N/A'
        assert listing[1]['school'] == "Engineering"
        assert 'password' not in listing[0]

    def test_departments_limit(self, database, factory):
        for name in ("Physics", "Chemistry", "Biology"):
            factory.department(name)

        assert [row['name'] for row in list_departments(database, limit=2)] == ["Biology", "Chemistry"]


class TestProfiles:
    def test_faculty_profile_placeholders(self, database, factory):
        asha = factory.faculty(gender="Female")

        profile = get_faculty_profile(asha, database)

        assert profile['gender'] == "Female"
        assert profile['school'] == 'N/A'
        assert profile['email'] == "faculty1@college.edu"
        assert profile['profile_pic'] is None

    def test_update_overwrites_editable_fields(self, database, factory):
        asha = factory.faculty(school="Engineering", mobile="98450 00000")

        profile = update_faculty_profile(asha, {
            'name': " Asha Rao ", 'gender': "Female", 'school': "",
            'department': "Physics", 'profile_pic': "https://files.example.com/asha.png",
        }, database)

        assert profile['name'] == "Asha Rao"
        assert profile['school'] == 'N/A'
        assert profile['department'] == "Physics"
        assert profile['mobile'] == "98450 00000"
        assert profile['profile_pic'] == "https://files.example.com/asha.png"

    def test_update_keeps_picture_when_none_given(self, database, factory):
        asha = factory.faculty(profile_pic="https://files.example.com/old.png")

        profile = update_faculty_profile(asha, {'name': "Asha Rao"}, database)

        assert profile['profile_pic'] == "https://files.example.com/old.png"

    def test_update_requires_name(self, database, factory):
        with pytest.raises(ValidationError, match="Name is required"):
            update_faculty_profile(factory.faculty(), {'name': ""}, database)

    def test_update_unknown_faculty(self, database):
        with pytest.raises(NotFoundError):
            update_faculty_profile(404, {'name': "Nobody"}, database)

    def test_department_profile(self, database, factory):
        cse = factory.department()

        profile = get_department_profile(cse, database)

        assert profile['department_id'] == "DEP001"
        assert profile['head_name'] == 'N/A'
        with pytest.raises(NotFoundError):
            get_department_profile(cse + 1, database)
