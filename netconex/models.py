"""Typed records for the student resource served by the CMS API."""
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AcademicYear(ApiModel):
    year_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class Department(ApiModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: Optional[int] = None
    name: Optional[str] = None


class Program(ApiModel):
    id: Optional[int] = None
    name: Optional[str] = None
    department: Optional[Department] = None
    session_id: Optional[int] = None
    academic_year: Optional[AcademicYear] = None


class Session(ApiModel):
    session_id: Optional[int] = None
    academic_year: Optional[AcademicYear] = None
    name: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class Person(ApiModel):
    id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None
    date_of_birth: Optional[date] = None


class Student(ApiModel):
    student_id: Optional[int] = None
    person: Optional[Person] = None
    program: Optional[Program] = None
    session: Optional[Session] = None
    field: Optional[str] = None
