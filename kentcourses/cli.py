"""
CLI (Command Line Interface).

Quick terminal access to the query API, e.g.:

    kentcourses course CS10051
    kentcourses course CS10051 --campus stark --no-professors
    kentcourses course CS10051 --mappings --json
    kentcourses section CS10051 001
    kentcourses rmp "John Smith"
    kentcourses report 123456
    kentcourses enrollment 202380 12345 001

Output is plain text unless --json is given.
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from typing import Any, List

from kentcourses import config
from kentcourses.constants import CAMPUS_TYPES
from kentcourses.model import Course, Section
from kentcourses.parse import describe_location
from kentcourses.rmp import get_rmp_report, search_rmp
from kentcourses.search import (
    DEFAULT_SEARCH_PARTS,
    SearchPart,
    get_enrollment,
    is_campus_type,
    search_by_section,
    search_course,
)
from kentcourses.validate import is_course_identifier


def _print_json(data: Any) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def _format_section(s: Section) -> str:
    where = ", ".join(describe_location(loc) for loc in s.location) or "TBA"
    e = s.enrollment
    seats = f"{e.current}/{e.max}" + (" FULL" if e.full else "")
    return f"  {s.section:<5} {s.term:<12} {s.campus:<15} {s.schedule:<28} {s.instructor or 'TBA':<24} {seats:<10} {where}"


def _print_course(course: Course) -> None:
    print(f"{course.name} | {course.catalog_name} ({course.credits} credits, {course.grading})")
    print(f"Prerequisites: {course.prerequisites}")
    print(course.description)

    if course.sections:
        print(f"\nSections ({len(course.sections)}):")
        for s in course.sections:
            print(_format_section(s))

    if course.professors:
        print(f"\nProfessors ({len(course.professors)}):")
        for p in course.professors:
            ids = ", ".join(p.rmp_ids) if p.rmp_ids else "no RMP entry"
            print(f"  {p.name} - {len(p.sections)} section(s) - {ids}")


def _cmd_course(args: argparse.Namespace) -> int:
    """
    Look up one course and print it.
    """
    ident = (args.identifier or "").strip()
    if not is_course_identifier(ident):
        print(f"Invalid course identifier: '{ident}' (expected e.g. CS10051)")
        return 1

    if not is_campus_type(args.campus):
        print(f"Unknown campus: '{args.campus}' (one of: {', '.join(CAMPUS_TYPES)})")
        return 1

    include: List[SearchPart] = list(DEFAULT_SEARCH_PARTS)
    if args.no_sections:
        include = []
    elif args.no_professors:
        include = [SearchPart.SECTIONS]

    course = search_course(ident, args.campus, use_mappings=args.mappings, include=include)
    if course is None:
        print(f"No data for {ident.upper()}.")
        return 1

    if args.json:
        _print_json(course.to_dict())
    else:
        _print_course(course)
    return 0


def _cmd_section(args: argparse.Namespace) -> int:
    payload = search_by_section((args.identifier or "").strip(), (args.section or "").strip())
    if payload is None:
        print(f"No section {args.section} found for {args.identifier}.")
        return 1

    if args.json:
        _print_json(payload.to_dict())
    else:
        print(f"{payload.name} ({payload.credits} credits, {payload.grading})")
        print(_format_section(payload.section))
        if payload.section.notes:
            print(f"  Notes: {payload.section.notes}")
    return 0


def _cmd_rmp(args: argparse.Namespace) -> int:
    res = search_rmp(args.name, args.campus, strategy=args.strategy)
    if res is None:
        print("Please provide a professor name.")
        return 1

    if not res.rmp_ids:
        print(f"No RMP entries for {res.name}.")
        return 0

    print(f"{res.name}: {', '.join(res.rmp_ids)}")
    return 0


def _cmd_report(args: argparse.Namespace) -> int:
    report = get_rmp_report(args.rmp_id)
    if report is None:
        print(f"No RMP report for id {args.rmp_id}.")
        return 1

    if args.json:
        _print_json(asdict(report))
        return 0

    print(f"{report.name}")
    print(f"  Rating     : {report.average:.1f} ({report.ratings} ratings)")
    print(f"  Difficulty : {report.difficulty:.1f}")
    print(f"  Take again : {report.take_again:.0f}%")
    if report.tags:
        print(f"  Tags       : {', '.join(report.tags)}")
    return 0


def _cmd_enrollment(args: argparse.Namespace) -> int:
    payload = get_enrollment(args.term, args.crn, args.section)
    if payload is None:
        print(f"No enrollment data for CRN {args.crn} ({args.term}).")
        return 1

    if args.json:
        _print_json(asdict(payload))
        return 0

    print(f"{payload.total - payload.available}/{payload.total} seats taken, {payload.available} open"
          + (" (overfilled)" if payload.overfill else ""))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="kentcourses", description="Kent State course catalog scraper")
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="Logging level (default: %(default)s)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_course = sub.add_parser("course", help="Look up a course")
    p_course.add_argument("identifier", type=str, help="Course identifier (e.g. CS10051)")
    p_course.add_argument("--campus", "-c", type=str, default="any", help="Only keep sections of this campus")
    p_course.add_argument("--mappings", action="store_true", help="Use bundled offline data first")
    p_course.add_argument("--no-sections", action="store_true", help="Skip sections (and professors)")
    p_course.add_argument("--no-professors", action="store_true", help="Skip RMP lookups")
    p_course.add_argument("--json", action="store_true", help="Print JSON")

    p_section = sub.add_parser("section", help="Look up one section of a course")
    p_section.add_argument("identifier", type=str, help="Course identifier (e.g. CS10051)")
    p_section.add_argument("section", type=str, help="Section code (e.g. 001)")
    p_section.add_argument("--json", action="store_true", help="Print JSON")

    p_rmp = sub.add_parser("rmp", help="Find RateMyProfessors ids of an instructor")
    p_rmp.add_argument("name", type=str, help="Instructor name")
    p_rmp.add_argument("--campus", "-c", type=str, default="any")
    p_rmp.add_argument("--strategy", choices=("graphql", "mapping"), default=None)

    p_report = sub.add_parser("report", help="Show the RMP rating report of an id")
    p_report.add_argument("rmp_id", type=str, help="RMP teacher id")
    p_report.add_argument("--json", action="store_true", help="Print JSON")

    p_enr = sub.add_parser("enrollment", help="Show seat counts of a section")
    p_enr.add_argument("term", type=str, help="Term code (e.g. 202380)")
    p_enr.add_argument("crn", type=str, help="Class number (CRN)")
    p_enr.add_argument("section", type=str, help="Section code")
    p_enr.add_argument("--json", action="store_true", help="Print JSON")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if args.command == "course":
        raise SystemExit(_cmd_course(args))
    if args.command == "section":
        raise SystemExit(_cmd_section(args))
    if args.command == "rmp":
        raise SystemExit(_cmd_rmp(args))
    if args.command == "report":
        raise SystemExit(_cmd_report(args))
    if args.command == "enrollment":
        raise SystemExit(_cmd_enrollment(args))

    raise SystemExit(2)
