"""
Markdown rendering of a computed schedule (Schedule of Works).

The engine owns the dates; this module only formats them: schedule table,
project summary, Gantt-style outline and critical path analysis.
"""
import math
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from backend.app.schedule.models import ComputedSchedule, ScheduleTemplate

GANTT_WIDTH = 60
GANTT_NAME_WIDTH = 30
BAR_CHAR = "█"


def _project_type_label(project_type: str) -> str:
    return project_type.replace("-", " ", 1).upper()


def _weeks(n: int) -> str:
    return f"{n} week{'s' if n > 1 else ''}"


def _gantt_bar(start_week: int, span: int, columns: int, width: int) -> str:
    cells = []
    for i in range(columns):
        if start_week <= i < start_week + span:
            cells.append(BAR_CHAR * width)
        else:
            cells.append(" " * width)
    return "|" + "".join(cells) + "|"


def render_gantt_outline(schedule: ComputedSchedule, template: ScheduleTemplate) -> str:
    """One bar per activity, grouped by phase and work package.

    Columns are weeks since project start; the column width shrinks so the
    chart stays around GANTT_WIDTH characters.
    """
    columns = max(1, schedule.total_duration_weeks)
    width = max(1, GANTT_WIDTH // columns)
    lines: List[str] = []
    for phase in template.phases:
        lines.append("")
        lines.append(f"### {phase.title}")
        for work_package in phase.work_packages:
            lines.append("")
            lines.append(f"{work_package.title}:")
            for activity in work_package.activities:
                row = schedule.activities.get(activity.id)
                if row is None:
                    continue
                start_week = (row.start - schedule.project_start_date).days // 7
                span = int(math.ceil((row.finish - row.start).days / 7)) + 1
                bar = _gantt_bar(start_week, span, columns, width)
                lines.append(f"{activity.id} {activity.name.ljust(GANTT_NAME_WIDTH)} {bar}")
    return "\n".join(lines)


def render_schedule_report(
    schedule: ComputedSchedule,
    template: ScheduleTemplate,
    location: Optional[str] = None,
    finish_tier: Optional[str] = None,
    include_kitchen: bool = False,
    include_bathroom: bool = False,
    include_mep: bool = True,
    generated_on: Optional[date] = None,
) -> str:
    generated = generated_on or date.today()
    out: List[str] = []
    out.append("# PROJECT SCHEDULE (SCHEDULE OF WORKS)")
    out.append("")
    out.append(f"Project Type: {_project_type_label(schedule.project_type)}")
    if location:
        out.append(f"Location: {location}")
    out.append(f"Area: {schedule.area:g}m²")
    if finish_tier:
        out.append(f"Finish Tier: {finish_tier.upper()}")
    out.append(f"Project Start: {schedule.project_start_date.isoformat()}")
    out.append(f"Generated: {generated.isoformat()}")
    out.append("")

    out.append("## SCHEDULE TABLE")
    out.append("")
    out.append("| WBS Code | Task Name | Duration | Start | Finish | Dependencies | Milestone |")
    out.append("|----------|-----------|----------|-------|--------|--------------|----------|")
    for phase in template.phases:
        out.append(f"| **{phase.title}** | | | | | | |")
        for work_package in phase.work_packages:
            out.append(f"| **{work_package.title}** | | | | | | |")
            for activity in work_package.activities:
                row = schedule.activities[activity.id]
                deps = ", ".join(row.dependencies) if row.dependencies else "-"
                milestone = "✓" if row.is_milestone else "-"
                out.append(
                    f"| {row.id} | {row.name} | {_weeks(row.scaled_duration)} | {row.start.isoformat()} | "
                    f"{row.finish.isoformat()} | {deps} | {milestone} |"
                )

    out.append("")
    out.append("## PROJECT SUMMARY")
    out.append("")
    out.append(f"• Total Project Duration: {schedule.total_duration_weeks} weeks")
    out.append(f"• Project End Date: {schedule.project_end_date.isoformat()}")
    out.append(f"• Key Milestones: {schedule.milestone_count} milestones identified")
    out.append("")

    out.append("## GANTT-STYLE OUTLINE")
    out.append(render_gantt_outline(schedule, template))

    out.append("")
    out.append("## CRITICAL PATH ANALYSIS")
    out.append("")
    out.append("The critical path represents the longest sequence of dependent activities:")
    out.append("")
    if schedule.critical_path:
        out.append(f"Critical Path: {' → '.join(schedule.critical_path)}")
        out.append("")
        out.append("Activities on the critical path must be completed on time to avoid project delays.")

    if schedule.warnings:
        out.append("")
        out.append("## SCHEDULE WARNINGS")
        out.append("")
        for w in schedule.warnings:
            out.append(f"• {w}")

    out.append("")
    out.append("## PROJECT-SPECIFIC CONSIDERATIONS")
    out.append("")
    out.append("• Weather Delays: Allow 10% buffer for weather-related delays")
    out.append("• Material Lead Times: Order materials 4-6 weeks in advance")
    out.append("• Permit Approvals: Factor in 2-4 weeks for regulatory approvals")
    out.append("• Quality Control: Weekly progress meetings and inspections")
    out.append("• Risk Management: Regular risk assessments and mitigation planning")
    out.append("")
    if include_kitchen:
        out.append("• Kitchen Installation: Coordinate with kitchen supplier delivery schedule")
    if include_bathroom:
        out.append("• Bathroom Installation: Ensure waterproofing is completed before tiling")
    if not include_mep:
        out.append("• MEP Works: Not included in this project scope")

    out.append("")
    out.append("---")
    out.append("")
    out.append("Document Control:")
    out.append("• Version: 1.0")
    out.append("• Status: Draft")
    out.append(f"• Next Review: {(generated + timedelta(days=7)).isoformat()}")
    return "\n".join(out) + "\n"


def format_schedule_summary(schedule: ComputedSchedule) -> Dict[str, Any]:
    """
    Format a computed schedule summary for UI consumption.

    Args:
        schedule: Result of compute_schedule()

    Returns:
        Structured JSON for schedule summary display
    """
    return {
        "ui": "schedule_summary",
        "data": {
            "project_type": schedule.project_type,
            "project_start_date": schedule.project_start_date.isoformat(),
            "project_end_date": schedule.project_end_date.isoformat(),
            "total_duration_weeks": schedule.total_duration_weeks,
            "milestone_count": schedule.milestone_count,
            "activity_count": len(schedule.activities),
            "critical_path": list(schedule.critical_path),
            "critical_path_text": " → ".join(schedule.critical_path),
            "warnings": list(schedule.warnings),
        }
    }
