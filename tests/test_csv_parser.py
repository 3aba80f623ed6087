"""Tests for the CSV employee parser and the resource openers."""

import io
from contextlib import contextmanager

import pytest

from employee_api.core.errors import ParseError, ResourceNotFoundError
from employee_api.csv_parser import load_employees_from_csv
from employee_api.resources import FileResource, PackageResource, UploadResource
from employee_api.schemas import split_location


class TestSplitLocation:
    def test_city_and_state(self):
        assert split_location("Chicago, IL") == ("Chicago", "IL")

    def test_no_comma(self):
        assert split_location("Remote") == ("Remote", "")

    def test_splits_on_first_comma_only(self):
        assert split_location("Washington, DC, USA") == ("Washington", "DC, USA")

    def test_empty(self):
        assert split_location("") == ("", "")
        assert split_location(None) == ("", "")


class TestLoadEmployees:
    def test_parses_rows(self, write_csv):
        path = write_csv('Ann,Lee,"New York, NY",5-Jan-30\nBo,Kim,Remote,13/1/2020\n')
        employees = load_employees_from_csv(FileResource(path))

        assert len(employees) == 2
        ann, bo = employees
        assert (ann.first_name, ann.last_name) == ("Ann", "Lee")
        assert (ann.city, ann.state, ann.location) == ("New York", "NY", "New York, NY")
        assert ann.birth_date == "5-Jan-30"
        assert (bo.city, bo.state) == ("Remote", "")
        assert bo.birth_date == "13/1/2020"

    def test_preserves_order_and_count(self, write_csv):
        body = "".join(f"First{i},Last{i},\"City{i}, ST\",1/1/1990\n" for i in range(25))
        employees = load_employees_from_csv(FileResource(write_csv(body)))
        assert [e.first_name for e in employees] == [f"First{i}" for i in range(25)]

    def test_columns_looked_up_by_name(self, write_csv):
        path = write_csv(
            "1/2/1980,Chicago,Lee,Ann\n",
            header="Birthday, Location ,Last name,First name\n",
        )
        (emp,) = load_employees_from_csv(FileResource(path))
        assert (emp.first_name, emp.last_name, emp.city, emp.birth_date) == (
            "Ann", "Lee", "Chicago", "1/2/1980",
        )

    def test_extra_columns_ignored(self, write_csv):
        path = write_csv("7,Ann,Lee,Remote,1/2/1980\n", header="Id,First name,Last name,Location,Birthday\n")
        (emp,) = load_employees_from_csv(FileResource(path))
        assert emp.first_name == "Ann"

    def test_header_only_yields_nothing(self, write_csv):
        assert load_employees_from_csv(FileResource(write_csv(""))) == []

    def test_empty_location_and_birthday_allowed(self, write_csv):
        (emp,) = load_employees_from_csv(FileResource(write_csv("Ann,Lee,,\n")))
        assert (emp.city, emp.state, emp.location, emp.birth_date) == ("", "", "", "")

    def test_utf8_bom_stripped(self, tmp_path):
        path = tmp_path / "bom.csv"
        path.write_bytes("\ufeffFirst name,Last name,Location,Birthday\nAnn,Lee,Remote,1/1/1990\n".encode("utf-8"))
        (emp,) = load_employees_from_csv(FileResource(path))
        assert emp.first_name == "Ann"


class TestParseErrors:
    def test_missing_required_column(self, write_csv):
        path = write_csv("Ann,Lee,Remote\n", header="First name,Last name,Location\n")
        with pytest.raises(ParseError, match="Birthday"):
            load_employees_from_csv(FileResource(path))

    def test_row_missing_a_field_aborts_everything(self, write_csv):
        path = write_csv("Ann,Lee,Remote,1/1/1990\nBo,Kim\n")
        with pytest.raises(ParseError, match="fila 3"):
            load_employees_from_csv(FileResource(path))

    def test_blank_first_name(self, write_csv):
        path = write_csv("Ann,Lee,Remote,1/1/1990\n  ,Kim,Remote,1/1/1990\n")
        with pytest.raises(ParseError, match="first_name"):
            load_employees_from_csv(FileResource(path))

    def test_too_many_fields(self, write_csv):
        path = write_csv("Ann,Lee,Remote,1/1/1990\nBo,Kim,Remote,1/1/1990,extra,more\n")
        with pytest.raises(ParseError):
            load_employees_from_csv(FileResource(path))

    def test_empty_file(self, write_csv):
        with pytest.raises(ParseError):
            load_employees_from_csv(FileResource(write_csv("", header="")))

    def test_not_utf8(self):
        resource = UploadResource("latin1.csv", "First name\nJosé\n".encode("latin-1"))
        with pytest.raises(ParseError):
            load_employees_from_csv(resource)


class TestResources:
    def test_missing_file(self, tmp_path):
        with pytest.raises(ResourceNotFoundError):
            with FileResource(tmp_path / "nope.csv").open_text():
                pass

    def test_stream_closed_after_parse_error(self):
        class RecordingResource:
            name = "recording"
            stream = None

            @contextmanager
            def open_text(self):
                with io.StringIO("First name,Last name\nAnn,Lee\n") as f:
                    self.stream = f
                    yield f

        resource = RecordingResource()
        with pytest.raises(ParseError):
            load_employees_from_csv(resource)
        assert resource.stream is not None
        assert resource.stream.closed

    def test_package_resource(self):
        employees = load_employees_from_csv(PackageResource("employee_api", "data/employees.csv"))
        assert len(employees) > 0
        assert employees[0].first_name == "Ann"

    def test_package_resource_missing(self):
        with pytest.raises(ResourceNotFoundError):
            with PackageResource("employee_api", "data/missing.csv").open_text():
                pass

    def test_upload_resource(self):
        data = b"First name,Last name,Location,Birthday\nAnn,Lee,\"Austin, TX\",1/1/1990\n"
        (emp,) = load_employees_from_csv(UploadResource("upload.csv", data))
        assert (emp.city, emp.state) == ("Austin", "TX")


class TestFieldCounts:
    def test_trailing_comma_on_every_row(self, write_csv):
        path = write_csv("Ann,Lee,Remote,1/1/1990,\nBo,Kim,Remote,2/2/1991,\n")
        with pytest.raises(ParseError, match="fila 2"):
            load_employees_from_csv(FileResource(path))

    def test_single_row_with_extra_field(self):
        data = b"First name,Last name,Location,Birthday\nAnn,Lee,Remote,1/1/1990,junk\n"
        with pytest.raises(ParseError, match="5 campos"):
            load_employees_from_csv(UploadResource("extra.csv", data))

    def test_short_row_detected_by_field_count(self):
        data = b"First name,Last name,Location,Birthday\nAnn,Lee,Remote,1/1/1990\nBo,Kim\n"
        with pytest.raises(ParseError, match="fila 3 tiene 2 campos"):
            load_employees_from_csv(UploadResource("short.csv", data))

    def test_quoted_comma_is_one_field(self, write_csv):
        (emp,) = load_employees_from_csv(FileResource(write_csv('Ann,Lee,"Austin, TX",1/1/1990\n')))
        assert (emp.first_name, emp.city, emp.state) == ("Ann", "Austin", "TX")

    def test_blank_lines_ignored(self, write_csv):
        path = write_csv("Ann,Lee,Remote,1/1/1990\n\nBo,Kim,Remote,2/2/1991\n")
        employees = load_employees_from_csv(FileResource(path))
        assert [e.first_name for e in employees] == ["Ann", "Bo"]

    def test_unreadable_file(self, write_csv, monkeypatch):
        path = write_csv("Ann,Lee,Remote,1/1/1990\n")

        def denied(self, *args, **kwargs):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(type(path), "open", denied)
        with pytest.raises(ResourceNotFoundError, match="Permission denied"):
            load_employees_from_csv(FileResource(path))
