"""Starter project generation from domain, project type and complexity."""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from quotecraft.domain.entities import (
    Category,
    Feature,
    Invoice,
    Metadata,
    ProjectConfig,
    Section,
)
from quotecraft.domain.errors import ValidationError, unknown_choice
from quotecraft.domain.totals import compute_totals
from quotecraft.utils.date_parser import days_after_iso, today_iso

logger = logging.getLogger(__name__)

PROJECT_DOMAINS = (
    "SaaS",
    "AI",
    "FinTech",
    "E-commerce",
    "Agriculture",
    "Healthcare",
    "GovTech",
    "Logistics",
    "Education",
    "Enterprise Systems",
    "Startup MVP",
    "Custom Software",
)

PROJECT_TYPES = (
    "Web App",
    "Mobile App",
    "Web + Mobile",
    "Platform / Marketplace",
    "Internal System",
    "AI-Powered System",
)

COMPLEXITY_LEVELS = ("MVP", "Standard", "Advanced / Enterprise", "Fully Custom")


class Inclusion(Enum):
    """How a template feature is offered to the client."""

    REQUIRED = "required"
    BEYOND_MVP = "beyond_mvp"
    OPTIONAL = "optional"


@dataclass(frozen=True)
class FeatureBlueprint:
    description: str
    detail: str
    share: float
    inclusion: Inclusion = Inclusion.REQUIRED


@dataclass(frozen=True)
class SectionBlueprint:
    """A template section: base hours per tier split across its features."""

    key: str
    title: str
    category: str
    hourly_rate: int
    base_hours: tuple[int, int, int]
    features: tuple[FeatureBlueprint, ...]


SECTION_BLUEPRINTS = {
    blueprint.key: blueprint
    for blueprint in (
        SectionBlueprint(
            key="preliminary",
            title="PRELIMINARY STUDY & PLANNING",
            category="Project Analysis",
            hourly_rate=100,
            base_hours=(20, 40, 60),
            features=(
                FeatureBlueprint(
                    "Requirements Gathering",
                    "Stakeholder interviews, user stories, functional requirements",
                    0.4,
                ),
                FeatureBlueprint(
                    "Technical Feasibility Study",
                    "Architecture planning, technology stack selection",
                    0.3,
                ),
                FeatureBlueprint(
                    "Project Roadmap", "Milestones, timeline, delivery schedule", 0.3
                ),
            ),
        ),
        SectionBlueprint(
            key="ux_ui",
            title="UX/UI DESIGN",
            category="User Experience Design",
            hourly_rate=90,
            base_hours=(40, 80, 120),
            features=(
                FeatureBlueprint(
                    "User Research & Personas",
                    "User interviews, persona creation, journey mapping",
                    0.2,
                    Inclusion.BEYOND_MVP,
                ),
                FeatureBlueprint(
                    "Wireframing", "Low-fidelity wireframes for all key screens", 0.3
                ),
                FeatureBlueprint(
                    "High-Fidelity UI Design",
                    "Complete visual design, design system, components",
                    0.5,
                ),
            ),
        ),
        SectionBlueprint(
            key="frontend",
            title="FRONTEND DEVELOPMENT",
            category="Web Application (React)",
            hourly_rate=85,
            base_hours=(120, 240, 400),
            features=(
                FeatureBlueprint(
                    "Authentication System",
                    "Login, registration, password reset, social auth",
                    0.15,
                ),
                FeatureBlueprint(
                    "Core User Interface",
                    "Dashboard, navigation, responsive layouts",
                    0.4,
                ),
                FeatureBlueprint(
                    "Data Management & Forms",
                    "CRUD operations, form validation, data tables",
                    0.25,
                ),
                FeatureBlueprint(
                    "Advanced Features",
                    "Search, filtering, notifications, real-time updates",
                    0.2,
                    Inclusion.BEYOND_MVP,
                ),
            ),
        ),
        SectionBlueprint(
            key="backend",
            title="BACKEND & API DEVELOPMENT",
            category="Server & Database",
            hourly_rate=95,
            base_hours=(100, 200, 350),
            features=(
                FeatureBlueprint(
                    "REST API Development",
                    "RESTful endpoints, authentication, authorization",
                    0.4,
                ),
                FeatureBlueprint(
                    "Database Design & Implementation",
                    "Schema design, migrations, optimization",
                    0.3,
                ),
                FeatureBlueprint(
                    "Business Logic & Services",
                    "Core business rules, data processing, workflows",
                    0.3,
                ),
            ),
        ),
        SectionBlueprint(
            key="mobile",
            title="MOBILE APPLICATION DEVELOPMENT",
            category="Mobile App (React Native)",
            hourly_rate=90,
            base_hours=(150, 280, 450),
            features=(
                FeatureBlueprint(
                    "Authentication & Onboarding",
                    "Login, registration, biometric auth, tutorials",
                    0.15,
                ),
                FeatureBlueprint(
                    "Core Mobile Features",
                    "Navigation, screens, mobile-optimized UI",
                    0.5,
                ),
                FeatureBlueprint(
                    "Native Features",
                    "Camera, geolocation, push notifications, offline mode",
                    0.25,
                    Inclusion.BEYOND_MVP,
                ),
                FeatureBlueprint(
                    "App Store Deployment",
                    "iOS and Android app store submission",
                    0.1,
                    Inclusion.OPTIONAL,
                ),
            ),
        ),
        SectionBlueprint(
            key="marketplace",
            title="MARKETPLACE FEATURES",
            category="Marketplace Core",
            hourly_rate=100,
            base_hours=(80, 150, 250),
            features=(
                FeatureBlueprint(
                    "Multi-User System",
                    "Vendor/buyer roles, user profiles, verification",
                    0.3,
                ),
                FeatureBlueprint(
                    "Product/Service Listings",
                    "Listing creation, search, filters, categories",
                    0.4,
                ),
                FeatureBlueprint(
                    "Payment Integration",
                    "Payment gateway, escrow, commission handling",
                    0.3,
                ),
            ),
        ),
        SectionBlueprint(
            key="ai",
            title="AI & MACHINE LEARNING",
            category="AI Features",
            hourly_rate=120,
            base_hours=(60, 120, 200),
            features=(
                FeatureBlueprint(
                    "AI Model Integration",
                    "LLM integration, API setup, prompt engineering",
                    0.4,
                ),
                FeatureBlueprint(
                    "Intelligent Features",
                    "Recommendations, predictions, automated analysis",
                    0.4,
                ),
                FeatureBlueprint(
                    "Data Processing Pipeline",
                    "Data collection, preprocessing, model training",
                    0.2,
                    Inclusion.BEYOND_MVP,
                ),
            ),
        ),
        SectionBlueprint(
            key="infrastructure",
            title="INFRASTRUCTURE & HOSTING",
            category="Cloud Infrastructure",
            hourly_rate=95,
            base_hours=(20, 40, 60),
            features=(
                FeatureBlueprint(
                    "Cloud Deployment", "AWS/Azure/GCP setup, CI/CD pipeline", 0.5
                ),
                FeatureBlueprint(
                    "Domain & SSL", "Domain configuration, SSL certificates", 0.2
                ),
                FeatureBlueprint(
                    "Monitoring & Logging",
                    "Application monitoring, error tracking, analytics",
                    0.3,
                    Inclusion.BEYOND_MVP,
                ),
            ),
        ),
        SectionBlueprint(
            key="security",
            title="SECURITY & COMPLIANCE",
            category="Security Implementation",
            hourly_rate=110,
            base_hours=(15, 30, 50),
            features=(
                FeatureBlueprint(
                    "Security Audit",
                    "Vulnerability assessment, penetration testing",
                    0.4,
                    Inclusion.BEYOND_MVP,
                ),
                FeatureBlueprint(
                    "Data Protection",
                    "Encryption, GDPR compliance, privacy policies",
                    0.4,
                ),
                FeatureBlueprint(
                    "Backup & Recovery",
                    "Automated backups, disaster recovery plan",
                    0.2,
                ),
            ),
        ),
        SectionBlueprint(
            key="documentation",
            title="DOCUMENTATION & TRAINING",
            category="Documentation",
            hourly_rate=80,
            base_hours=(20, 40, 60),
            features=(
                FeatureBlueprint(
                    "Technical Documentation",
                    "API docs, architecture diagrams, developer guides",
                    0.5,
                ),
                FeatureBlueprint(
                    "User Manual",
                    "End-user documentation, tutorials, FAQs",
                    0.3,
                    Inclusion.BEYOND_MVP,
                ),
                FeatureBlueprint(
                    "Training Sessions",
                    "Staff training, admin training, video tutorials",
                    0.2,
                    Inclusion.OPTIONAL,
                ),
            ),
        ),
        SectionBlueprint(
            key="maintenance",
            title="MAINTENANCE & SUPPORT",
            category="Post-Launch Support (Monthly)",
            hourly_rate=85,
            base_hours=(10, 20, 40),
            features=(
                FeatureBlueprint(
                    "Bug Fixes & Updates",
                    "Monthly bug fixes, minor updates, compatibility",
                    0.5,
                    Inclusion.OPTIONAL,
                ),
                FeatureBlueprint(
                    "Technical Support",
                    "Email/chat support, issue resolution",
                    0.3,
                    Inclusion.OPTIONAL,
                ),
                FeatureBlueprint(
                    "Performance Optimization",
                    "Monthly performance reviews and optimizations",
                    0.2,
                    Inclusion.OPTIONAL,
                ),
            ),
        ),
    )
}


def complexity_tier(complexity: str) -> int:
    """Map a complexity level to its base-hours tier (0, 1 or 2)."""
    if complexity == "MVP":
        return 0
    if complexity == "Standard":
        return 1
    return 2


def base_hours(section_key: str, complexity: str) -> int:
    """Return the base hours of a template section for a complexity level.

    Raises:
        ValidationError: If the section key is unknown
    """
    blueprint = SECTION_BLUEPRINTS.get(section_key)
    if blueprint is None:
        raise ValidationError(
            unknown_choice("section", section_key, tuple(SECTION_BLUEPRINTS))
        )
    return blueprint.base_hours[complexity_tier(complexity)]


def section_keys_for(config: ProjectConfig) -> list[str]:
    """Return the ordered template sections that apply to a project."""
    keys = ["preliminary", "ux_ui"]

    if "Web" in config.project_type:
        keys.extend(["frontend", "backend"])

    if "Mobile" in config.project_type:
        keys.append("mobile")

    if config.project_type == "Platform / Marketplace":
        keys.append("marketplace")

    if config.project_type == "AI-Powered System" or config.domain == "AI":
        keys.append("ai")

    keys.extend(["infrastructure", "security", "documentation", "maintenance"])
    return keys


def build_section(blueprint: SectionBlueprint, complexity: str) -> Section:
    """Allocate a section's base hours across its features."""
    hours_budget = blueprint.base_hours[complexity_tier(complexity)]
    beyond_mvp = complexity != "MVP"

    features = []
    for item in blueprint.features:
        if item.inclusion is Inclusion.REQUIRED:
            included = True
        elif item.inclusion is Inclusion.BEYOND_MVP:
            included = beyond_mvp
        else:
            included = False

        hours = round(hours_budget * item.share, 2)
        features.append(
            Feature(
                description=item.description,
                detail=item.detail,
                hours=hours,
                price=round(hours * blueprint.hourly_rate, 2),
                required=included,
                selected=included,
            )
        )

    return Section(
        title=blueprint.title,
        categories=[Category(name=blueprint.category, features=features)],
    )


def validate_config(config: ProjectConfig) -> None:
    """Check a project config against the known choices.

    Raises:
        ValidationError: If any field is outside its fixed set
    """
    if config.domain not in PROJECT_DOMAINS:
        raise ValidationError(unknown_choice("domain", config.domain, PROJECT_DOMAINS))
    if config.project_type not in PROJECT_TYPES:
        raise ValidationError(
            unknown_choice("project type", config.project_type, PROJECT_TYPES)
        )
    if config.complexity not in COMPLEXITY_LEVELS:
        raise ValidationError(
            unknown_choice("complexity", config.complexity, COMPLEXITY_LEVELS)
        )


def generate_template(
    config: ProjectConfig,
    currency: str = "USD",
    validity_days: int = 30,
    today: Optional[date] = None,
) -> Invoice:
    """Build a starter invoice for a project configuration.

    Args:
        config: Domain, project type and complexity choices
        currency: Currency code for the generated prices
        validity_days: Days until the quotation expires
        today: Creation date (defaults to today)

    Returns:
        Invoice with consistent totals

    Raises:
        ValidationError: If the configuration uses unknown choices
    """
    validate_config(config)

    sections = [
        build_section(SECTION_BLUEPRINTS[key], config.complexity)
        for key in section_keys_for(config)
    ]
    logger.debug(
        "Generated %d template sections for %s / %s / %s",
        len(sections),
        config.domain,
        config.project_type,
        config.complexity,
    )

    metadata = Metadata(
        project_name=f"{config.domain} {config.project_type} Project",
        created_at=today_iso(today),
        currency=currency,
        valid_until=days_after_iso(validity_days, today),
        domain=config.domain,
        project_type=config.project_type,
        complexity=config.complexity,
    )

    return Invoice(metadata=metadata, sections=sections, totals=compute_totals(sections))
