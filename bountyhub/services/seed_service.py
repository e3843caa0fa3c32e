"""
Demo data for local development — ``flask seed-demo``.

Loads three organizations, three hackers, one program per organization,
a few reports at different lifecycle stages and some learning resources.
Idempotent: does nothing when any user already exists.
"""

import logging

from bountyhub.models import db
from bountyhub.models.program import Program, ProgramTag
from bountyhub.models.report import Report
from bountyhub.models.resource import Resource
from bountyhub.models.user import User
from bountyhub.utils.crypto import hash_password

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "securepassword"

_ORGANIZATIONS = [
    ("fintechbank", "security@fintechbank.com", "FinTech Banking", "Leading financial services company"),
    ("securecloud", "security@securecloud.com", "SecureCloud", "Cloud infrastructure provider"),
    ("ecommart", "security@ecommart.com", "EcomMart", "E-commerce platform"),
]

_HACKERS = [
    ("securityalex", "alex@example.com", "Alex Wei", "Security researcher with 5+ years of experience", 95),
    ("zerosec", "sarah@example.com", "Sarah Chen", "Passionate about finding vulnerabilities", 88),
    ("secmark", "mark@example.com", "Mark Johnson", "Specialized in API security", 82),
]

_PROGRAMS = [
    {
        "title": "FinTech Banking Security Program",
        "description": "Help us secure our banking applications",
        "industry": "Financial Services",
        "scope": "All web and mobile applications under the fintechbank.com domain",
        "rules": "No DOS testing. No social engineering.",
        "rewards": {"critical": 10000, "high": 5000, "medium": 1500, "low": 500},
        "min_bounty": 500, "max_bounty": 10000, "response_time": 24,
        "tags": ["API", "Web", "Mobile"],
    },
    {
        "title": "SecureCloud Platform Bug Bounty",
        "description": "Find vulnerabilities in our cloud infrastructure",
        "industry": "Cloud Infrastructure",
        "scope": "All cloud services and APIs under securecloud.com",
        "rules": "Automated scanning is not allowed. Report responsibly.",
        "rewards": {"critical": 15000, "high": 7500, "medium": 2500, "low": 1000},
        "min_bounty": 1000, "max_bounty": 15000, "response_time": 48,
        "tags": ["Cloud", "API", "IAM"],
    },
    {
        "title": "EcomMart Security Program",
        "description": "Secure our e-commerce platform and payment systems",
        "industry": "E-commerce",
        "scope": "All web applications, mobile apps, and payment systems",
        "rules": "No testing on production payment systems without approval",
        "rewards": {"critical": 5000, "high": 2500, "medium": 1000, "low": 300},
        "min_bounty": 300, "max_bounty": 5000, "response_time": 72,
        "tags": ["Web", "Payment", "Mobile"],
    },
]


def seed_demo_data() -> int:
    """Insert the demo dataset and commit. Returns the number of rows created."""
    if User.query.first() is not None:
        logger.info("Users already present — skipping demo seed")
        return 0

    password_hash = hash_password(DEMO_PASSWORD)
    created = 0

    orgs = []
    for username, email, full_name, bio in _ORGANIZATIONS:
        org = User(username=username, email=email, full_name=full_name, bio=bio,
                   user_type="organization", password_hash=password_hash)
        db.session.add(org)
        orgs.append(org)
    hackers = []
    for username, email, full_name, bio, reputation in _HACKERS:
        hacker = User(username=username, email=email, full_name=full_name, bio=bio,
                      user_type="hacker", password_hash=password_hash, reputation=reputation)
        db.session.add(hacker)
        hackers.append(hacker)
    db.session.flush()
    created += len(orgs) + len(hackers)

    programs = []
    for org, fields in zip(orgs, _PROGRAMS):
        fields = dict(fields)
        tags = fields.pop("tags")
        program = Program(organization_id=org.id, status="active", **fields)
        program.tags = [ProgramTag(tag=t) for t in tags]
        db.session.add(program)
        programs.append(program)
    db.session.flush()
    created += len(programs)

    reports = [
        Report(
            title="Authentication Bypass in Login Form",
            description="Discovered a way to bypass authentication",
            hacker_id=hackers[0].id, program_id=programs[0].id,
            severity="high", status="accepted", reward_amount=5000,
            steps_to_reproduce="1. Intercept the login request\n2. Modify authentication header\n"
                               "3. Access restricted area",
            impact="Unauthorized access to user accounts and sensitive data",
        ),
        Report(
            title="SQL Injection in Search Function",
            description="SQL injection vulnerability in product search",
            hacker_id=hackers[1].id, program_id=programs[2].id,
            severity="critical", status="fixed", reward_amount=3500,
            steps_to_reproduce="1. Enter specific SQL characters in search\n2. Observe database error\n"
                               "3. Extract data using UNION statements",
            impact="Potential access to all customer data and orders",
        ),
        Report(
            title="Insecure Direct Object Reference",
            description="IDOR vulnerability in user profile",
            hacker_id=hackers[2].id, program_id=programs[1].id,
            severity="medium", status="pending",
            steps_to_reproduce="1. Login to account\n2. Change user ID in URL\n3. Access another user's data",
            impact="Unauthorized access to other user's information",
        ),
    ]
    db.session.add_all(reports)
    created += len(reports)

    resources = [
        Resource(title="Web Application Security Testing Guide",
                 description="Comprehensive guide for web application security testing",
                 content="This guide covers various aspects of web application security testing...",
                 author_id=hackers[0].id, category="Guides"),
        Resource(title="API Security Best Practices",
                 description="Learn about securing your APIs",
                 content="This guide covers best practices for securing your APIs...",
                 author_id=hackers[1].id, category="Best Practices"),
        Resource(title="Mobile App Penetration Testing",
                 description="Introduction to mobile app security testing",
                 content="This guide introduces mobile app penetration testing techniques...",
                 author_id=hackers[2].id, category="Tutorials"),
    ]
    db.session.add_all(resources)
    created += len(resources)

    db.session.commit()
    logger.info("Seeded %d demo rows", created)
    return created
