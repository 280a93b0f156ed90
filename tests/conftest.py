"""
Pytest configuration and shared fixtures.
"""

import pytest

from resume_ats.models import (
    CustomSection,
    Education,
    Experience,
    JobDescription,
    PersonalInfo,
    Resume,
    SectionKind,
    Skill,
    SkillLevel,
)


SCENARIO_A_SKILLS = ["JavaScript", "SQL", "Leadership", "Testing", "Docker", "Git", "Agile", "Communication"]


@pytest.fixture
def scenario_a_resume() -> Resume:
    """Summary, one experience with two bullets, eight skills, no education or contact details."""
    return Resume(
        personal_info=PersonalInfo(summary="Experienced software engineer."),
        experience=[
            Experience(
                id="exp-1",
                position="Software Engineer",
                company="Acme",
                description=["Built systems", "Led team"],
            )
        ],
        skills=[Skill(id=f"skill-{i}", name=name) for i, name in enumerate(SCENARIO_A_SKILLS)],
    )


@pytest.fixture
def scenario_a_job() -> JobDescription:
    return JobDescription(
        title="Software Engineer",
        company="Acme",
        description=(
            "Looking for a software engineer with leadership and communication skills, "
            "experience with JavaScript and SQL."
        ),
    )


@pytest.fixture
def empty_resume() -> Resume:
    return Resume()


@pytest.fixture
def project_manager_job() -> JobDescription:
    return JobDescription(description="Seeking a project manager with budget management experience.")


@pytest.fixture
def full_resume() -> Resume:
    """A resume with every section filled in."""
    return Resume(
        personal_info=PersonalInfo(
            full_name="Jane Doe",
            email="jane@example.com",
            phone="555-0100",
            location="Austin, TX",
            linkedin="linkedin.com/in/janedoe",
            website="janedoe.dev",
            summary="Backend engineer with eight years of experience building data platforms.",
        ),
        experience=[
            Experience(
                id="exp-1",
                company="Globex",
                position="Senior Engineer",
                location="Remote",
                start_date="2020-01",
                current=True,
                description=[
                    "Led migration of billing to Python services",
                    "Cut report latency by 40% & saved $20k",
                ],
            ),
            Experience(
                id="exp-2",
                company="Initech",
                position="Software Engineer",
                location="Austin, TX",
                start_date="2016-06",
                end_date="2019-12",
                description=["Built internal_tools for QA", "Maintained CI pipelines"],
            ),
        ],
        education=[
            Education(
                id="edu-1",
                institution="University of Texas",
                degree="BSc",
                field="Computer Science",
                start_date="2012",
                end_date="2016",
                gpa="3.8",
                honors="Cum Laude",
            )
        ],
        skills=[
            Skill(id="s1", name="Python", level=SkillLevel.EXPERT, category="Languages"),
            Skill(id="s2", name="Go", level=SkillLevel.ADVANCED, category="Languages"),
            Skill(id="s3", name="PostgreSQL", level=SkillLevel.ADVANCED, category="Databases"),
            Skill(id="s4", name="Mentoring", level=SkillLevel.INTERMEDIATE, category=""),
        ],
        custom_sections=[
            CustomSection(id="c1", title="Projects", content="Open source CLI\nConference talk", kind=SectionKind.LIST),
            CustomSection(id="c2", title="Interests", content="Climbing and chess."),
        ],
    )
