"""
Static fallback content

Sample documents served when the GitHub content repository cannot be
reached or denies access. They are stored in the same frontmatter format
as the live files and go through the same parser.
"""

from typing import Dict, List, Optional

from .frontmatter import parse_frontmatter
from .models import ContentItem, DirectoryEntry, FileContent

DIRECTORIES = ("Experience", "Skills", "Projects", "Education", "Journal", "About")


FALLBACK_DOCUMENTS: Dict[str, Dict[str, str]] = {
    "Experience": {
        "devops-engineer.md": """---
title: "DevOps Engineer"
company: "Tech Innovations Inc."
start: "March 2023"
end: "Present"
location: "San Francisco, CA"
order: 1
---
- Own the CI/CD platform and Kubernetes clusters behind 40+ services
- Cut deployment time from 45 minutes to under 8 with GitHub Actions and Argo CD
- Introduced OpenTelemetry tracing, reducing mean time to recovery by 60%

**Technologies:** Kubernetes, Terraform, AWS, GitHub Actions, Python
""",
        "senior-solutions-consultant.md": """---
title: "Senior Solutions Consultant"
company: "Digital Solutions Corp"
period: "June 2019 - February 2023"
location: "Remote"
order: 2
---
- Designed integration architectures for enterprise customers
- Led technical discovery and proof-of-concept delivery for 30+ accounts
- Built internal tooling that automated environment provisioning

**Technologies:** Python, TypeScript, Docker, PostgreSQL, Kafka
""",
    },
    "Skills": {
        "technical-skills.md": """---
title: "Technical Skills"
order: 1
---
## Languages
**Expert:** TypeScript, JavaScript, Python
**Advanced:** Go, Java, SQL

## Backend
**Python:** Django, FastAPI, Flask
**APIs:** REST, GraphQL, gRPC, WebSockets

## Cloud & DevOps
**AWS:** EC2, S3, Lambda, RDS, ECS
**Containers:** Docker, Kubernetes, Helm
**IaC:** Terraform, Pulumi
""",
        "practices.md": """---
title: "Architecture & Practices"
order: 2
---
- Microservices & Event-Driven Architecture
- Domain-Driven Design
- Test-Driven Development
- Performance Optimization & Monitoring
""",
    },
    "Projects": {
        "terminal-resume.md": """---
title: "Terminal Resume"
status: "In Progress"
timeline: "2024 - Present"
order: 1
---
This site: a resume you navigate like a terminal, with an AI assistant
answering questions about my work.

- **Tech:** Python, FastAPI, OpenAI API
""",
        "devflow-cli.md": """---
title: "DevFlow CLI"
status: "Completed"
timeline: "January 2022 - August 2023"
order: 2
---
A command-line tool that automates common development workflows.

- Integrated with 15+ popular development tools
- **Tech:** Go, Cobra, SQLite, GitHub API
""",
        "datastream-analytics.md": """---
title: "DataStream Analytics"
status: "Completed"
timeline: "2020 - 2021"
order: 3
---
Streaming analytics platform with customizable dashboards.

- Sub-second latency for real-time updates
- **Tech:** TypeScript, D3.js, WebSockets, Kafka, ClickHouse
""",
    },
    "Education": {
        "stanford-ms.md": """---
title: "Master of Science in Computer Science"
school: "Stanford University"
start: "2013"
end: "2015"
order: 1
---
Focus: Distributed Systems and Machine Learning

- Research on distributed consensus algorithms
- Teaching Assistant for Distributed Systems
""",
        "berkeley-bs.md": """---
title: "Bachelor of Science in Computer Engineering"
institution: "UC Berkeley"
period: "2009 - 2013"
order: 2
---
- Dean's List all semesters
- President of ACM Student Chapter
""",
    },
    "Journal": {
        "boring-technology.md": """---
title: "Choose Boring Technology"
date: "2024-03"
order: 1
---
Your users care about reliability, not your tech stack. Experiment with new
tools for learning; run proven ones in production.
""",
        "teaching-to-learn.md": """---
title: "Teaching Is Debugging Your Understanding"
date: "2023-11"
order: 2
---
Explaining a system to someone else is the fastest way to find the parts
you do not really understand yet.
""",
    },
    "About": {
        "about.md": """---
title: "About Joshua Lossner"
order: 1
---
Engineer with a background in consulting and platform work, building
systems that scale and tooling that makes teams faster.

## What I Do
I build distributed systems, delivery pipelines and developer tools, with a
focus on solutions that operators can reason about.

## Philosophy
Write code humans can understand and documentation that actually helps.
The best technology decisions balance innovation with pragmatism.
""",
    },
}

SETUP_INSTRUCTIONS = """
## Live content unavailable

This entry is served from built-in sample data because the content
repository could not be read.

To serve live content, set these environment variables and restart:

- `GITHUB_OWNER` / `GITHUB_REPO`: repository holding the markdown files
- `CONTENT_ROOT`: folder inside the repository (default `content`)
- `GITHUB_TOKEN`: personal access token, required for private repositories
"""


def _documents(directory: str) -> Dict[str, str]:
    for name, documents in FALLBACK_DOCUMENTS.items():
        if name.lower() == (directory or "").lower():
            return documents
    return {}


def fallback_directories(root: str) -> List[DirectoryEntry]:
    """The fixed directory enumeration."""
    return [DirectoryEntry(name=name, path=f"{root}/{name}") for name in DIRECTORIES]


def fallback_items(directory: str) -> List[ContentItem]:
    """Unsorted sample listing for a directory (empty for unknown directories)."""
    items = []
    for filename, text in _documents(directory).items():
        parsed = parse_frontmatter(text, filename)
        items.append(ContentItem(
            name=filename,
            title=parsed.title,
            order=parsed.order,
            metadata=parsed.metadata,
        ))
    return items


def fallback_body(directory: str, filename: str) -> Optional[str]:
    """Body of a sample document, or None when there is no such sample."""
    text = _documents(directory).get(filename)
    if text is None:
        return None
    return parse_frontmatter(text, filename).body


def fallback_file(directory: str, filename: str) -> FileContent:
    """Placeholder for a file that could not be fetched."""
    text = _documents(directory).get(filename)
    parsed = parse_frontmatter(text or "", filename)
    return FileContent(
        title=parsed.title,
        content=SETUP_INSTRUCTIONS,
        metadata=parsed.metadata,
        filename=filename,
    )
