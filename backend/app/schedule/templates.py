"""
Built-in schedule templates (Schedule of Works) keyed by project type.

Durations are nominal weeks. Phase and work-package durations are
informational only; scheduling is driven by activity durations and
dependencies.
"""
import logging
from typing import Dict, List, Optional

from .models import ScheduleTemplate

logger = logging.getLogger(__name__)

NEW_BUILD = "new-build"
FIT_OUT = "fit-out"
REFURBISHMENT = "refurbishment"

PROJECT_TYPES: List[str] = [NEW_BUILD, FIT_OUT, REFURBISHMENT]
DEFAULT_PROJECT_TYPE = NEW_BUILD


def _a(activity_id: str, name: str, duration: int, dependencies: List[str], milestone: bool = False) -> dict:
    return {
        "id": activity_id,
        "name": name,
        "nominal_duration": duration,
        "dependencies": dependencies,
        "is_milestone": milestone,
    }


_TEMPLATE_DATA: Dict[str, dict] = {
    NEW_BUILD: {
        "phases": [
            {
                "id": "pre-construction", "title": "Pre-Construction", "duration": 12,
                "work_packages": [
                    {
                        "id": "surveys-approvals", "title": "Surveys & Approvals", "duration": 6,
                        "activities": [
                            _a("1.1.1", "Topographical Survey", 1, []),
                            _a("1.1.2", "Soil Investigation", 2, ["1.1.1"]),
                            _a("1.1.3", "Utility Mapping", 1, ["1.1.1"]),
                            _a("1.1.4", "Environmental Assessment", 2, ["1.1.2"]),
                            _a("1.1.5", "Planning Permission Application", 4, ["1.1.3", "1.1.4"], True),
                            _a("1.1.6", "Building Regulations Approval", 2, ["1.1.5"], True),
                        ],
                    },
                    {
                        "id": "design-documentation", "title": "Design & Documentation", "duration": 8,
                        "activities": [
                            _a("1.2.1", "Concept Design", 2, ["1.1.1"]),
                            _a("1.2.2", "Detailed Architectural Drawings", 4, ["1.2.1"]),
                            _a("1.2.3", "Structural Calculations", 3, ["1.2.2"]),
                            _a("1.2.4", "MEP Design", 3, ["1.2.2"]),
                            _a("1.2.5", "Technical Specifications", 2, ["1.2.3", "1.2.4"]),
                            _a("1.2.6", "Bill of Quantities", 1, ["1.2.5"]),
                        ],
                    },
                ],
            },
            {
                "id": "construction", "title": "Construction", "duration": 24,
                "work_packages": [
                    {
                        "id": "site-preparation", "title": "Site Preparation", "duration": 2,
                        "activities": [
                            _a("2.1.1", "Site Mobilisation", 1, ["1.1.6"]),
                            _a("2.1.2", "Hoarding & Security", 1, ["2.1.1"]),
                            _a("2.1.3", "Site Clearance", 1, ["2.1.2"]),
                            _a("2.1.4", "Temporary Works", 1, ["2.1.3"]),
                        ],
                    },
                    {
                        "id": "substructure", "title": "Substructure", "duration": 4,
                        "activities": [
                            _a("2.2.1", "Excavation Works", 1, ["2.1.4"]),
                            _a("2.2.2", "Foundation Construction", 2, ["2.2.1"], True),
                            _a("2.2.3", "Basement Works (if applicable)", 2, ["2.2.2"]),
                            _a("2.2.4", "Drainage & Waterproofing", 1, ["2.2.3"]),
                        ],
                    },
                    {
                        "id": "superstructure", "title": "Superstructure", "duration": 6,
                        "activities": [
                            _a("2.3.1", "Structural Frame", 3, ["2.2.4"], True),
                            _a("2.3.2", "Slabs & Beams", 2, ["2.3.1"]),
                            _a("2.3.3", "Roof Structure", 2, ["2.3.2"]),
                            _a("2.3.4", "Staircases & Ramps", 1, ["2.3.3"]),
                        ],
                    },
                    {
                        "id": "building-envelope", "title": "Building Envelope", "duration": 4,
                        "activities": [
                            _a("2.4.1", "External Walls", 2, ["2.3.1"]),
                            _a("2.4.2", "Windows & Glazing", 2, ["2.4.1"]),
                            _a("2.4.3", "Roofing", 2, ["2.3.3"]),
                            _a("2.4.4", "External Doors", 1, ["2.4.2"]),
                        ],
                    },
                    {
                        "id": "internal-works", "title": "Internal Works", "duration": 6,
                        "activities": [
                            _a("2.5.1", "Partitions & Linings", 2, ["2.3.1"]),
                            _a("2.5.2", "Flooring", 2, ["2.5.1"]),
                            _a("2.5.3", "Ceilings", 2, ["2.5.2"]),
                            _a("2.5.4", "Internal Doors", 1, ["2.5.3"]),
                            _a("2.5.5", "Wall Finishes", 2, ["2.5.4"]),
                            _a("2.5.6", "Joinery", 2, ["2.5.5"]),
                        ],
                    },
                    {
                        "id": "mep", "title": "MEP Installation", "duration": 8,
                        "activities": [
                            _a("2.6.1", "HVAC Systems", 3, ["2.3.1"]),
                            _a("2.6.2", "Electrical Installation", 4, ["2.5.1"]),
                            _a("2.6.3", "Plumbing & Drainage", 3, ["2.5.1"]),
                            _a("2.6.4", "Fire Safety Systems", 2, ["2.6.2"]),
                            _a("2.6.5", "ELV Systems", 2, ["2.6.2"]),
                        ],
                    },
                ],
            },
            {
                "id": "external-works", "title": "External Works", "duration": 3,
                "work_packages": [
                    {
                        "id": "landscaping", "title": "Landscaping", "duration": 3,
                        "activities": [
                            _a("3.1.1", "Hard Landscaping", 2, ["2.4.4"]),
                            _a("3.1.2", "Soft Landscaping", 1, ["3.1.1"]),
                            _a("3.1.3", "External Lighting", 1, ["3.1.2"]),
                            _a("3.1.4", "Car Parking", 1, ["3.1.1"]),
                        ],
                    },
                ],
            },
            {
                "id": "handover", "title": "Handover & Close-Out", "duration": 3,
                "work_packages": [
                    {
                        "id": "testing-commissioning", "title": "Testing & Commissioning", "duration": 2,
                        "activities": [
                            _a("4.1.1", "MEP Testing", 1, ["2.6.5"]),
                            _a("4.1.2", "System Commissioning", 1, ["4.1.1"]),
                            _a("4.1.3", "Performance Testing", 1, ["4.1.2"]),
                        ],
                    },
                    {
                        "id": "completion", "title": "Completion", "duration": 2,
                        "activities": [
                            _a("4.2.1", "Snagging & De-snagging", 1, ["4.1.3"]),
                            _a("4.2.2", "Final Inspections", 1, ["4.2.1"], True),
                            _a("4.2.3", "As-Built Drawings", 1, ["4.2.2"]),
                            _a("4.2.4", "O&M Manuals", 1, ["4.2.3"]),
                            _a("4.2.5", "Handover Documentation", 1, ["4.2.4"], True),
                        ],
                    },
                ],
            },
        ],
    },
    FIT_OUT: {
        "phases": [
            {
                "id": "pre-construction", "title": "Pre-Construction", "duration": 6,
                "work_packages": [
                    {
                        "id": "surveys-approvals", "title": "Surveys & Approvals", "duration": 3,
                        "activities": [
                            _a("1.1.1", "Measured Building Survey", 1, []),
                            _a("1.1.2", "Authority NOCs", 1, ["1.1.1"]),
                            _a("1.1.3", "Fire Safety Assessment", 1, ["1.1.2"]),
                            _a("1.1.4", "Planning Permission (if required)", 2, ["1.1.3"], True),
                        ],
                    },
                    {
                        "id": "design-documentation", "title": "Design & Documentation", "duration": 4,
                        "activities": [
                            _a("1.2.1", "Interior Layouts", 2, ["1.1.1"]),
                            _a("1.2.2", "MEP Shop Drawings", 2, ["1.2.1"]),
                            _a("1.2.3", "Material Specifications", 1, ["1.2.2"]),
                            _a("1.2.4", "Technical Drawings", 1, ["1.2.3"]),
                        ],
                    },
                ],
            },
            {
                "id": "construction", "title": "Construction", "duration": 12,
                "work_packages": [
                    {
                        "id": "site-preparation", "title": "Site Preparation", "duration": 1,
                        "activities": [
                            _a("2.1.1", "Hoarding & Mobilisation", 1, ["1.1.4"]),
                            _a("2.1.2", "Strip-Out Works", 1, ["2.1.1"]),
                            _a("2.1.3", "Site Protection", 1, ["2.1.2"]),
                            _a("2.1.4", "Temporary Services", 1, ["2.1.3"]),
                        ],
                    },
                    {
                        "id": "internal-works", "title": "Internal Works", "duration": 6,
                        "activities": [
                            _a("2.2.1", "Partitions & Ceilings", 2, ["2.1.4"]),
                            _a("2.2.2", "Flooring & Finishes", 2, ["2.2.1"]),
                            _a("2.2.3", "Internal Doors", 1, ["2.2.2"]),
                            _a("2.2.4", "Wall Finishes", 2, ["2.2.3"]),
                            _a("2.2.5", "Joinery & Fittings", 2, ["2.2.4"]),
                        ],
                    },
                    {
                        "id": "mep", "title": "MEP", "duration": 4,
                        "activities": [
                            _a("2.3.1", "HVAC Ducting & Units", 2, ["2.2.1"]),
                            _a("2.3.2", "Electrical Cabling & Lighting", 2, ["2.2.1"]),
                            _a("2.3.3", "Plumbing & Sanitary", 2, ["2.2.1"]),
                            _a("2.3.4", "Fire Safety Systems", 1, ["2.3.2"]),
                            _a("2.3.5", "Data & Communications", 1, ["2.3.2"]),
                        ],
                    },
                ],
            },
            {
                "id": "handover", "title": "Handover", "duration": 2,
                "work_packages": [
                    {
                        "id": "testing-commissioning", "title": "Testing & Commissioning", "duration": 1,
                        "activities": [
                            _a("3.1.1", "MEP Testing", 1, ["2.3.5"]),
                            _a("3.1.2", "System Commissioning", 1, ["3.1.1"]),
                            _a("3.1.3", "Performance Testing", 1, ["3.1.2"]),
                        ],
                    },
                    {
                        "id": "completion", "title": "Completion", "duration": 1,
                        "activities": [
                            _a("3.2.1", "Snagging & De-snagging", 1, ["3.1.3"]),
                            _a("3.2.2", "O&M Manuals", 1, ["3.2.1"]),
                            _a("3.2.3", "As-Built Drawings", 1, ["3.2.2"]),
                            _a("3.2.4", "Handover Documentation", 1, ["3.2.3"], True),
                        ],
                    },
                ],
            },
        ],
    },
    REFURBISHMENT: {
        "phases": [
            {
                "id": "pre-construction", "title": "Pre-Construction", "duration": 8,
                "work_packages": [
                    {
                        "id": "surveys-approvals", "title": "Surveys & Approvals", "duration": 4,
                        "activities": [
                            _a("1.1.1", "Structural Survey", 1, []),
                            _a("1.1.2", "Asbestos Survey", 1, ["1.1.1"]),
                            _a("1.1.3", "Planning Permission", 3, ["1.1.2"], True),
                            _a("1.1.4", "Building Regulations", 2, ["1.1.3"], True),
                            _a("1.1.5", "Party Wall Agreements", 2, ["1.1.4"]),
                        ],
                    },
                    {
                        "id": "design-documentation", "title": "Design & Documentation", "duration": 6,
                        "activities": [
                            _a("1.2.1", "Existing Condition Survey", 2, ["1.1.1"]),
                            _a("1.2.2", "Refurbishment Design", 3, ["1.2.1"]),
                            _a("1.2.3", "Structural Modifications", 2, ["1.2.2"]),
                            _a("1.2.4", "MEP Upgrades", 2, ["1.2.2"]),
                            _a("1.2.5", "Heritage Assessment (if applicable)", 1, ["1.2.2"]),
                        ],
                    },
                ],
            },
            {
                "id": "construction", "title": "Construction", "duration": 16,
                "work_packages": [
                    {
                        "id": "demolition", "title": "Demolition & Strip-Out", "duration": 3,
                        "activities": [
                            _a("2.1.1", "Asbestos Removal", 1, ["1.1.5"]),
                            _a("2.1.2", "Structural Demolition", 2, ["2.1.1"]),
                            _a("2.1.3", "MEP Removal", 1, ["2.1.2"]),
                            _a("2.1.4", "Waste Management", 1, ["2.1.3"]),
                        ],
                    },
                    {
                        "id": "structural-works", "title": "Structural Works", "duration": 4,
                        "activities": [
                            _a("2.2.1", "Structural Modifications", 2, ["2.1.4"]),
                            _a("2.2.2", "Foundation Works", 2, ["2.2.1"], True),
                            _a("2.2.3", "Structural Repairs", 2, ["2.2.2"]),
                            _a("2.2.4", "Structural Upgrades", 2, ["2.2.3"]),
                        ],
                    },
                    {
                        "id": "building-envelope", "title": "Building Envelope", "duration": 3,
                        "activities": [
                            _a("2.3.1", "Roof Repairs/Replacement", 2, ["2.2.4"]),
                            _a("2.3.2", "Window Replacement", 2, ["2.3.1"]),
                            _a("2.3.3", "External Wall Repairs", 2, ["2.3.2"]),
                            _a("2.3.4", "Weatherproofing", 1, ["2.3.3"]),
                        ],
                    },
                    {
                        "id": "internal-works", "title": "Internal Works", "duration": 4,
                        "activities": [
                            _a("2.4.1", "New Partitions", 2, ["2.2.4"]),
                            _a("2.4.2", "Flooring Installation", 2, ["2.4.1"]),
                            _a("2.4.3", "Ceiling Works", 2, ["2.4.2"]),
                            _a("2.4.4", "Internal Doors", 1, ["2.4.3"]),
                            _a("2.4.5", "Wall Finishes", 2, ["2.4.4"]),
                            _a("2.4.6", "Kitchen/Bathroom Installation", 2, ["2.4.5"]),
                        ],
                    },
                    {
                        "id": "mep", "title": "MEP Installation", "duration": 4,
                        "activities": [
                            _a("2.5.1", "Electrical Rewiring", 2, ["2.4.1"]),
                            _a("2.5.2", "Plumbing Installation", 2, ["2.4.1"]),
                            _a("2.5.3", "Heating Systems", 2, ["2.5.2"]),
                            _a("2.5.4", "Ventilation", 2, ["2.5.1"]),
                            _a("2.5.5", "Fire Safety Systems", 1, ["2.5.4"]),
                        ],
                    },
                ],
            },
            {
                "id": "handover", "title": "Handover", "duration": 2,
                "work_packages": [
                    {
                        "id": "testing-commissioning", "title": "Testing & Commissioning", "duration": 1,
                        "activities": [
                            _a("3.1.1", "MEP Testing", 1, ["2.5.5"]),
                            _a("3.1.2", "System Commissioning", 1, ["3.1.1"]),
                            _a("3.1.3", "Performance Testing", 1, ["3.1.2"]),
                        ],
                    },
                    {
                        "id": "completion", "title": "Completion", "duration": 1,
                        "activities": [
                            _a("3.2.1", "Snagging & De-snagging", 1, ["3.1.3"]),
                            _a("3.2.2", "Final Inspections", 1, ["3.2.1"], True),
                            _a("3.2.3", "O&M Manuals", 1, ["3.2.2"]),
                            _a("3.2.4", "As-Built Drawings", 1, ["3.2.3"]),
                            _a("3.2.5", "Handover Documentation", 1, ["3.2.4"], True),
                        ],
                    },
                ],
            },
        ],
    },
}

# Validated once at import; frozen models are shared read-only.
SCHEDULE_TEMPLATES: Dict[str, ScheduleTemplate] = {
    project_type: ScheduleTemplate.model_validate({"project_type": project_type, **data})
    for project_type, data in _TEMPLATE_DATA.items()
}


def get_template(project_type: Optional[str], default: str = DEFAULT_PROJECT_TYPE) -> ScheduleTemplate:
    """Return the template for project_type.

    Unknown or empty types fall back to `default` (new-build) rather than
    failing; the fallback is logged.
    """
    template = SCHEDULE_TEMPLATES.get((project_type or "").strip().lower())
    if template is None:
        logger.warning("Unknown project type %r; falling back to %s template", project_type, default)
        template = SCHEDULE_TEMPLATES.get(default) or SCHEDULE_TEMPLATES[DEFAULT_PROJECT_TYPE]
    return template
