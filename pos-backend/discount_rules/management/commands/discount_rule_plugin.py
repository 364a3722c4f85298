"""
Install or uninstall discount requirement rules.

Usage examples:
    python manage.py discount_rule_plugin install
    python manage.py discount_rule_plugin uninstall --rule DiscountRequirement.HasOneProduct --dry-run
"""

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from discounts.registry import get_all_rules, get_rule
from discounts.services import get_all_discount_requirements


class Command(BaseCommand):
    help = "Install (register display strings) or uninstall (remove requirements and strings) discount requirement rules."

    def add_arguments(self, parser):
        parser.add_argument("action", choices=["install", "uninstall"])
        parser.add_argument(
            "--rule",
            dest="rules",
            action="append",
            help="Rule system name; repeat for several. Defaults to every registered rule.",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Print what uninstall would remove without touching the database.",
        )

    def handle(self, *args, **options):
        rules = self._resolve_rules(options.get("rules"))
        action = options["action"]

        for rule in rules:
            if action == "install":
                rule.install()
                self.stdout.write(self.style.SUCCESS(f"Installed {rule.system_name}"))
                continue

            count = get_all_discount_requirements(rule_system_name=rule.system_name).count()
            if options["dry_run"]:
                self.stdout.write(f"  - {rule.system_name}: {count:,} requirements would be removed")
                continue
            with transaction.atomic():
                rule.uninstall()
            self.stdout.write(self.style.SUCCESS(f"Uninstalled {rule.system_name} ({count:,} requirements removed)"))

    def _resolve_rules(self, names):
        if not names:
            rules = get_all_rules()
            if not rules:
                raise CommandError("No discount requirement rules are registered.")
            return rules
        rules = []
        for name in names:
            rule = get_rule(name)
            if rule is None:
                raise CommandError(f"Unknown discount requirement rule: {name}")
            rules.append(rule)
        return rules
