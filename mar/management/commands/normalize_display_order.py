"""Backfill display order keys for MAR line items.

旧数据中存在未设置顺序键的用药行，插入/拖拽前需要先整体补齐。
"""

from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from mar.models import LineItem, MarForm
from mar.service.display_order import normalize_display_order


class Command(BaseCommand):
    help = "Assign display_order keys to every line item of forms that still have unordered rows."

    def add_arguments(self, parser) -> None:
        parser.add_argument(
            "--form",
            dest="form_id",
            type=int,
            help="Only normalize this MAR form id. Defaults to every form with unordered rows.",
        )

    def handle(self, *args, **options) -> None:
        form_id = options.get("form_id")
        if form_id is not None:
            if not MarForm.objects.filter(pk=form_id).exists():
                raise CommandError(f"MAR form {form_id} does not exist.")
            form_ids = [form_id]
        else:
            form_ids = list(
                LineItem.objects.filter(display_order__isnull=True)
                .values_list("form_id", flat=True)
                .distinct()
                .order_by("form_id")
            )

        for current in form_ids:
            items = normalize_display_order(current)
            self.stdout.write(f"Form {current}: {len(items)} line item(s) ordered.")

        self.stdout.write(self.style.SUCCESS(f"Normalized {len(form_ids)} form(s)."))
