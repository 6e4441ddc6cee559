"""Project Catalog — the open source projects listed on /projects."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Project:
    name: str
    description: str
    url: str
    language: str
    image: str | None = None


PROJECTS: tuple[Project, ...] = (
    Project(
        name="alexa-london-travel",
        description="An Alexa skill for checking the status of travel in London.",
        url="https://github.com/martincostello/alexa-london-travel",
        language="C#",
        image="/assets/img/projects/alexa-london-travel.png",
    ),
    Project(
        name="api",
        description="The API that powers the tools on this website.",
        url="https://github.com/martincostello/api",
        language="C#",
        image="/assets/img/projects/api.png",
    ),
    Project(
        name="dotnet-bumper",
        description="A tool for upgrading projects to newer versions of .NET.",
        url="https://github.com/martincostello/dotnet-bumper",
        language="C#",
    ),
    Project(
        name="sqllocaldb",
        description="SQL LocalDB wrapper for creating and managing instances of SQL Server LocalDB.",
        url="https://github.com/martincostello/sqllocaldb",
        language="C#",
        image="/assets/img/projects/sqllocaldb.png",
    ),
    Project(
        name="website",
        description="The source code for this website.",
        url="https://github.com/martincostello/website",
        language="Python",
    ),
)
