from __future__ import annotations

from datetime import datetime

import flet as ft

from campusgpa.config.settings import settings
from campusgpa.domain.logic.gpa import (
    low_performing_subjects,
    overall_credits,
    overall_gpa,
    semester_gpa,
    total_credits,
)
from campusgpa.domain.logic.grading import InvalidGradeScaleError, parse_scale_input
from campusgpa.domain.models.entities import Semester
from campusgpa.services.grade_scale import GradeScaleStore
from campusgpa.services.preferences import PreferenceStore
from campusgpa.services.record_store import MutationResult, RecordStore
from campusgpa.services.storage import Storage, StorageError


class CampusGpaApp:
    def __init__(self, page: ft.Page, storage: Storage | None = None) -> None:
        self.page = page
        self.page.title = "Campus GPA Tracker"
        self.page.scroll = ft.ScrollMode.AUTO
        storage = storage or Storage(settings.db_path)
        self.records = RecordStore(storage)
        self.scales = GradeScaleStore(storage)
        self.prefs = PreferenceStore(storage)
        self.status = ft.Text()

    def run(self) -> None:
        self.apply_theme()
        self.show_dashboard()

    def apply_theme(self) -> None:
        self.page.theme_mode = ft.ThemeMode.DARK if self.prefs.get_theme() == "dark" else ft.ThemeMode.LIGHT

    def notify(self, message: str, error: bool = False) -> None:
        self.status.value = message
        self.status.color = ft.Colors.RED if error else None
        self.page.update()

    def show_storage_error(self, exc: StorageError) -> None:
        self.page.clean()
        self.page.add(
            ft.Column(
                [
                    ft.Text("Saved data could not be read", size=24, weight=ft.FontWeight.BOLD),
                    ft.Text(str(exc), color=ft.Colors.RED),
                ]
            )
        )
        self.page.update()

    def header(self) -> ft.Control:
        return ft.Row(
            [
                ft.Text("Campus GPA Tracker", size=28, weight=ft.FontWeight.BOLD),
                ft.IconButton(icon=ft.Icons.SETTINGS, on_click=lambda _: self.show_settings()),
            ],
            alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
        )

    def show_dashboard(self) -> None:
        try:
            record = self.records.get_record()
            scale = self.scales.scale
        except StorageError as exc:
            self.show_storage_error(exc)
            return

        name = ft.TextField(label="Name", value=record.name)
        university = ft.TextField(label="University", value=record.university)
        year = ft.TextField(label="Year", value=str(datetime.now().year), width=120)
        term = ft.Dropdown(label="Semester", options=[ft.dropdown.Option(str(n)) for n in (1, 2, 3)], value="1", width=120)

        def save_profile(_: ft.ControlEvent) -> None:
            try:
                self.records.update_profile(name.value, university.value)
            except StorageError as exc:
                self.show_storage_error(exc)
                return
            self.show_dashboard()
            self.notify("Profile updated successfully")

        def add_semester(_: ft.ControlEvent) -> None:
            try:
                self.records.add_semester(int(year.value), int(term.value))
            except StorageError as exc:
                self.show_storage_error(exc)
                return
            except ValueError:
                self.notify("Year must be a number", error=True)
                return
            self.show_dashboard()
            self.notify("New semester added")

        def delete_semester(semester_id: str) -> None:
            try:
                result = self.records.delete_semester(semester_id)
            except StorageError as exc:
                self.show_storage_error(exc)
                return
            self.show_dashboard()
            if result is MutationResult.NOT_FOUND:
                self.notify("Semester no longer exists", error=True)
            else:
                self.notify("Semester deleted successfully")

        cards = [
            ft.Card(
                content=ft.Container(
                    ft.Row(
                        [
                            ft.TextButton(
                                f"{sem.year} - Semester {sem.semester}",
                                on_click=lambda _, sid=sem.id: self.show_semester(sid),
                            ),
                            ft.Text(f"GPA {semester_gpa(sem, scale):.2f}"),
                            ft.Text(f"{total_credits(sem.subjects)} credits"),
                            ft.IconButton(icon=ft.Icons.DELETE, on_click=lambda _, sid=sem.id: delete_semester(sid)),
                        ],
                        alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                    ),
                    padding=10,
                )
            )
            for sem in record.semesters
        ] or [ft.Text("No semesters yet")]

        self.page.clean()
        self.page.add(
            self.header(),
            ft.Row([name, university, ft.ElevatedButton("Save Profile", on_click=save_profile)]),
            ft.Row(
                [
                    ft.Text(f"Overall GPA: {overall_gpa(record, scale):.2f}", size=20, weight=ft.FontWeight.BOLD),
                    ft.Text(f"Total Credits: {overall_credits(record)}", size=20),
                ]
            ),
            ft.Row([year, term, ft.ElevatedButton("Add Semester", on_click=add_semester)]),
            ft.Divider(),
            *cards,
            ft.Divider(),
            self.analytics_view(record, scale),
            self.status,
        )

    def analytics_view(self, record, scale) -> ft.Control:
        flagged = low_performing_subjects(record, scale, settings.low_grade_threshold)
        if not flagged:
            return ft.Column(
                [
                    ft.Text("Need Your Attention", size=20, weight=ft.FontWeight.BOLD),
                    ft.Text("Good job! No subjects need special attention at the moment."),
                ]
            )
        return ft.Column(
            [
                ft.Text("Need Your Attention", size=20, weight=ft.FontWeight.BOLD),
                ft.DataTable(
                    columns=[
                        ft.DataColumn(ft.Text("Subject")),
                        ft.DataColumn(ft.Text("Semester")),
                        ft.DataColumn(ft.Text("Credits")),
                        ft.DataColumn(ft.Text("Grade")),
                    ],
                    rows=[
                        ft.DataRow(
                            cells=[
                                ft.DataCell(ft.Text(f.name)),
                                ft.DataCell(ft.Text(f"{f.year} - Sem {f.semester_number}")),
                                ft.DataCell(ft.Text(str(f.credits))),
                                ft.DataCell(ft.Text(f"{f.grade} ({f.grade_point:.1f})")),
                            ]
                        )
                        for f in flagged
                    ],
                ),
            ]
        )

    def show_semester(self, semester_id: str) -> None:
        try:
            semester = self.records.get_semester(semester_id)
            scale = self.scales.scale
        except StorageError as exc:
            self.show_storage_error(exc)
            return
        if semester is None:
            self.show_dashboard()
            self.notify("Semester no longer exists", error=True)
            return

        name = ft.TextField(label="Subject")
        credits = ft.TextField(label="Credits", value="3", width=120)
        grade = ft.Dropdown(label="Grade", options=[ft.dropdown.Option(g) for g in scale], value=next(iter(scale), None), width=120)

        def add_subject(_: ft.ControlEvent) -> None:
            if not name.value:
                self.notify("Subject name is required", error=True)
                return
            try:
                result = self.records.add_subject(semester_id, name.value, credits.value, grade.value)
            except StorageError as exc:
                self.show_storage_error(exc)
                return
            except ValueError as exc:
                self.notify(str(exc), error=True)
                return
            self.show_semester(semester_id)
            if result is MutationResult.APPLIED:
                self.notify("Subject added")

        def delete_subject(subject_id: str) -> None:
            try:
                result = self.records.delete_subject(semester_id, subject_id)
            except StorageError as exc:
                self.show_storage_error(exc)
                return
            self.show_semester(semester_id)
            if result is MutationResult.NOT_FOUND:
                self.notify("Subject no longer exists", error=True)
            else:
                self.notify("Subject deleted")

        self.page.clean()
        self.page.add(
            self.header(),
            ft.Row(
                [
                    ft.Text(f"{semester.year} - Semester {semester.semester}", size=24, weight=ft.FontWeight.BOLD),
                    ft.TextButton("Back", on_click=lambda _: self.show_dashboard()),
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            ),
            self.semester_stats(semester, scale),
            ft.Row([name, credits, grade, ft.ElevatedButton("Add Subject", on_click=add_subject)]),
            ft.Divider(),
            *[
                ft.Row(
                    [
                        ft.Text(f"{s.name} ({s.credits} cr) • {s.grade}"),
                        ft.IconButton(icon=ft.Icons.DELETE, on_click=lambda _, sid=s.id: delete_subject(sid)),
                    ],
                    alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                )
                for s in semester.subjects
            ],
            self.status,
        )

    @staticmethod
    def semester_stats(semester: Semester, scale) -> ft.Control:
        return ft.Row(
            [
                ft.Text(f"GPA: {semester_gpa(semester, scale):.2f}", size=18, weight=ft.FontWeight.BOLD),
                ft.Text(f"Credits: {total_credits(semester.subjects)}", size=18),
            ]
        )

    def show_settings(self) -> None:
        try:
            scale = self.scales.scale
        except StorageError as exc:
            self.show_storage_error(exc)
            return
        fields = {grade: ft.TextField(label=grade, value=str(points), width=100) for grade, points in scale.items()}

        def toggle_theme(_: ft.ControlEvent) -> None:
            try:
                theme = self.prefs.toggle_theme()
            except StorageError as exc:
                self.show_storage_error(exc)
                return
            self.apply_theme()
            self.notify(f"{theme.capitalize()} mode activated")

        def save_scale(_: ft.ControlEvent) -> None:
            try:
                self.scales.set_scale(parse_scale_input({g: f.value for g, f in fields.items()}))
            except InvalidGradeScaleError as exc:
                self.notify(str(exc), error=True)
                return
            self.notify("Grade point scale updated successfully")

        def reset_scale(_: ft.ControlEvent) -> None:
            try:
                self.scales.reset()
            except StorageError as exc:
                self.show_storage_error(exc)
                return
            self.show_settings()
            self.notify("Grade point scale reset to defaults")

        self.page.clean()
        self.page.add(
            ft.Row(
                [
                    ft.Text("Settings", size=24, weight=ft.FontWeight.BOLD),
                    ft.TextButton("Close", on_click=lambda _: self.show_dashboard()),
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            ),
            ft.Row([ft.Text("Toggle Dark/Light Mode"), ft.IconButton(icon=ft.Icons.BRIGHTNESS_6, on_click=toggle_theme)]),
            ft.Divider(),
            ft.Text("Grade Point Scale", size=20, weight=ft.FontWeight.BOLD),
            ft.Text("Customize the GPA value for each grade letter according to your university's grading system."),
            ft.Row(list(fields.values()), wrap=True),
            ft.Row(
                [
                    ft.ElevatedButton("Save Grade Scale", on_click=save_scale),
                    ft.OutlinedButton("Reset to Defaults", on_click=reset_scale),
                ]
            ),
            self.status,
        )


def main(page: ft.Page) -> None:
    CampusGpaApp(page).run()
