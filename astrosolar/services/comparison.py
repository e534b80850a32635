"""
Cross-project comparison summaries.

CHANGELOG:
- 2026-10-18: Initial creation
"""

from astrosolar.storage.models import Project


def summarize_projects(projects: list[Project]) -> list[dict]:
    """Rank projects by stored total energy output, highest first.

    Projects without stored calculations are listed last with null figures.
    """
    analyzed = [p for p in projects if p.calculations is not None]
    pending = [p for p in projects if p.calculations is None]
    analyzed.sort(key=lambda p: p.calculations.total_energy_output, reverse=True)

    summaries: list[dict] = []
    for rank, project in enumerate(analyzed, start=1):
        calc = project.calculations
        summaries.append(
            {
                "rank": rank,
                "projectId": project.id,
                "name": project.name,
                "totalEnergyOutput": calc.total_energy_output,
                "dailyAverage": calc.daily_average,
                "batteryRequired": calc.battery_required,
                "missionViability": calc.mission_viability,
            }
        )
    for project in pending:
        summaries.append(
            {
                "rank": None,
                "projectId": project.id,
                "name": project.name,
                "totalEnergyOutput": None,
                "dailyAverage": None,
                "batteryRequired": None,
                "missionViability": None,
            }
        )
    return summaries
