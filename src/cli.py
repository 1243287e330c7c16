"""
Tariff Rail CLI

Commands:
  serve      - Run the bill calculation server
  calculate  - Calculate a bill and print the itemized breakdown
  tariffs    - Show the loaded tariff schedule
"""

import argparse
import json
import os
import sys

import structlog


def _configure_logging():
    """Keep log events off stdout, which carries the command output."""
    structlog.configure(logger_factory=structlog.PrintLoggerFactory(file=sys.stderr))


def cmd_serve(args):
    """Run the bill calculation server."""
    import uvicorn

    port = args.port or int(os.environ.get("PORT", 8000))
    host = args.host or "0.0.0.0"

    print(f"Starting Tariff Rail on {host}:{port}")

    uvicorn.run(
        "api.server:app",
        host=host,
        port=port,
        reload=args.reload,
        workers=args.workers,
    )


def _format_line(line) -> str:
    quantity = f"{line.quantity:>10.2f} {line.unit:<5}" if line.quantity is not None else " " * 16
    return f"  {line.label:<28}{quantity} {line.amount:>10.2f}"


def cmd_calculate(args):
    """Calculate a bill and print the breakdown."""
    from core.dispatcher import calculate
    from core.errors import PayloadError, TariffScheduleError
    from core.presentation import effective_unit_price, invoice_lines
    from tariffs.loader import load_tariff_schedule
    from transport.normalize import normalize_payload

    body = {"group": args.group}
    for field in ("a1_kwh", "a2_kwh", "total_kwh", "high_kwh", "low_kwh", "demand_kw", "reactive_kvarh"):
        value = getattr(args, field)
        if value is not None:
            body[field] = value

    try:
        schedule = load_tariff_schedule(args.tariffs)
        payload = normalize_payload(body, strict=True)
    except (PayloadError, TariffScheduleError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    invoice = calculate(schedule, payload)

    if args.json:
        print(json.dumps(invoice.to_dict(), indent=2))
        return

    print(f"Bill Estimate - {invoice.group.label}")
    print("=" * 56)
    for line in invoice_lines(invoice):
        print(_format_line(line))
    price = effective_unit_price(invoice)
    if price is not None:
        print("-" * 56)
        print(f"  Effective price: {price:.4f} per kWh")


def cmd_tariffs(args):
    """Show the loaded tariff schedule."""
    from core.errors import TariffScheduleError
    from core.tariff import TariffGroup
    from tariffs.loader import load_tariff_schedule

    try:
        schedule = load_tariff_schedule(args.tariffs)
    except TariffScheduleError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Tariff Schedule: {schedule.name}")
    print("=" * 40)
    for group in TariffGroup:
        record = schedule.for_group(group).to_dict()
        print(f"{group.value} ({group.schedule_key}) - {group.label}")
        print(f"  {json.dumps(record)}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Tariff Rail - Electricity Bill Estimator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the server")
    serve_parser.add_argument("--host", default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=None)
    serve_parser.add_argument("--reload", action="store_true")
    serve_parser.add_argument("--workers", type=int, default=1)

    # calculate
    calc_parser = subparsers.add_parser("calculate", help="Calculate a bill")
    calc_parser.add_argument("group", help="Tariff group (household_two, household_one, group_1 ...)")
    calc_parser.add_argument("--a1", dest="a1_kwh", type=float, help="A1 (high) kWh")
    calc_parser.add_argument("--a2", dest="a2_kwh", type=float, help="A2 (low) kWh")
    calc_parser.add_argument("--total", dest="total_kwh", type=float, help="Total kWh")
    calc_parser.add_argument("--high", dest="high_kwh", type=float, help="High tariff kWh")
    calc_parser.add_argument("--low", dest="low_kwh", type=float, help="Low tariff kWh")
    calc_parser.add_argument("--demand", dest="demand_kw", type=float, help="Demand (kW)")
    calc_parser.add_argument("--reactive", dest="reactive_kvarh", type=float, help="Reactive energy (kVArh)")
    calc_parser.add_argument("--tariffs", help="Tariff schedule JSON path")
    calc_parser.add_argument("--json", action="store_true", help="Print the invoice as JSON")

    # tariffs
    tariffs_parser = subparsers.add_parser("tariffs", help="Show tariff schedule")
    tariffs_parser.add_argument("--tariffs", help="Tariff schedule JSON path")

    args = parser.parse_args(argv)
    _configure_logging()

    if args.command == "serve":
        cmd_serve(args)
    elif args.command == "calculate":
        cmd_calculate(args)
    elif args.command == "tariffs":
        cmd_tariffs(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
