"""
arraymeta Command Line Interface.

Commands:
    arraymeta itrf <antfile>          ITRF positions of antennas
    arraymeta baselines <antfile>     Zenith baselines
    arraymeta zenith <time>           J2000 zenith at a time and place
    arraymeta caltable <table>        Validate / export a calibration table
    arraymeta create <ms> <config>    Create a MeasurementSet
"""

import argparse
import os
import sys

import numpy as np


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="arraymeta - array geometry and calibration metadata",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # ITRF positions of antennas around OVRO
    arraymeta itrf antennas.txt --lon -118.2817 --lat 37.2339 --alt 1222

    # Zenith one hour after a start time
    arraymeta zenith 2020-01-01-00:00:00.0 --offset 3600 --lon -118.28 --lat 37.23

    # Check a gain table and export flags/gains
    arraymeta caltable gains.G -n 64 -o gains.h5

    # Create an MS from a config file
    arraymeta create out.ms array.yaml --start 2020-01-01-00:00:00.0
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Command")

    # =========================================================================
    # ITRF / BASELINES commands
    # =========================================================================
    itrf_parser = subparsers.add_parser("itrf", help="ITRF antenna positions")
    itrf_parser.add_argument("antfile", help="Antenna offsets (E N U per line)")
    _add_location_args(itrf_parser)
    itrf_parser.add_argument("-n", "--n-ant", type=int, default=None,
                             help="Number of antennas to read (default: all)")

    bl_parser = subparsers.add_parser("baselines", help="Zenith baselines")
    bl_parser.add_argument("antfile", help="Antenna offsets (E N U per line)")
    _add_location_args(bl_parser)
    bl_parser.add_argument("-n", "--n-ant", type=int, default=None,
                           help="Number of antennas to read (default: all)")

    # =========================================================================
    # ZENITH command
    # =========================================================================
    zen_parser = subparsers.add_parser("zenith", help="J2000 zenith direction")
    zen_parser.add_argument("time", help="UTC time, YYYY-MM-DD-HH:MM:SS.s")
    zen_parser.add_argument("--offset", type=float, default=0.0,
                            help="Seconds added to TIME (default: 0)")
    _add_location_args(zen_parser)

    # =========================================================================
    # CALTABLE command
    # =========================================================================
    cal_parser = subparsers.add_parser("caltable", help="Read a calibration table")
    cal_parser.add_argument("table", help="CASA calibration table")
    cal_parser.add_argument("-n", "--n-ant", type=int, default=None,
                            help="Expected number of antennas")
    cal_parser.add_argument("-o", "--output", default=None,
                            help="Write packed gains/flags to this HDF5 file")
    cal_parser.add_argument("--overwrite", action="store_true")

    # =========================================================================
    # CREATE command
    # =========================================================================
    create_parser = subparsers.add_parser("create", help="Create a MeasurementSet")
    create_parser.add_argument("ms", help="Output MeasurementSet path")
    create_parser.add_argument("config", help="YAML configuration file")
    create_parser.add_argument("--start", required=True,
                               help="UTC start, YYYY-MM-DD-HH:MM:SS.s")
    create_parser.add_argument("--duration", type=float, default=0.0,
                               help="Observation length in seconds")
    create_parser.add_argument("--track-zenith", action="store_true",
                               help="Store the J2000 zenith instead of AZEL")
    create_parser.add_argument("--overwrite", action="store_true")
    create_parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    handlers = {
        "itrf": _run_itrf,
        "baselines": _run_baselines,
        "zenith": _run_zenith,
        "caltable": _run_caltable,
        "create": _run_create,
    }

    try:
        handlers[args.command](args)
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        sys.exit(1)


def _add_location_args(parser):
    """Add array reference location arguments."""
    parser.add_argument("--lon", type=float, required=True,
                        help="Array longitude (degrees, east positive)")
    parser.add_argument("--lat", type=float, required=True,
                        help="Array latitude (degrees)")
    parser.add_argument("--alt", type=float, default=0.0,
                        help="Array altitude (meters, default: 0)")


def _reference(args):
    from arraymeta.config import ArrayReference
    return ArrayReference(args.lon, args.lat, args.alt)


def _require_file(path):
    if not os.path.exists(path):
        raise FileNotFoundError(f"Not found: {path}")


def _positions(args):
    from arraymeta.io.antenna_file import read_antenna_offsets
    from arraymeta.geometry.itrf import to_geocentric

    _require_file(args.antfile)
    offsets = read_antenna_offsets(args.antfile, n_ant=args.n_ant)
    return to_geocentric(offsets, _reference(args))


def _run_itrf(args):
    for i, (x, y, z) in enumerate(_positions(args)):
        print(f"{i:4d} {x:16.4f} {y:16.4f} {z:16.4f}")


def _run_baselines(args):
    from arraymeta.geometry.baselines import enumerate_baselines

    for bl in enumerate_baselines(_positions(args)):
        dx, dy, dz = bl.vector
        print(f"{bl.antenna1:4d} {bl.antenna2:4d} {dx:12.4f} {dy:12.4f} {dz:12.4f}")


def _run_zenith(args):
    from arraymeta.sky import str_to_epoch, get_zenith

    epoch = str_to_epoch(args.time, args.offset)
    zenith = get_zenith(_reference(args), epoch)
    print(f"Time:  {epoch.to_datetime().isoformat()} UTC (MJD {epoch.mjd:.6f})")
    print(f"Frame: {zenith.frame}")
    print(f"RA:    {np.degrees(zenith.longitude) % 360.0:.6f} deg")
    print(f"Dec:   {np.degrees(zenith.latitude):.6f} deg")


def _run_caltable(args):
    from arraymeta.io.caltable import read_cal_table
    from arraymeta.io.transport import save_cal_transport

    _require_file(args.table)
    gain, flag, shape = read_cal_table(args.table, n_ant=args.n_ant, verbose=True)

    if args.output:
        save_cal_transport(
            args.output, gain, flag, shape,
            source=args.table, overwrite=args.overwrite,
        )
        print(f"\nSaved to: {args.output}")


def _run_create(args):
    from arraymeta.config import load_config
    from arraymeta.io.antenna_file import read_antenna_offsets
    from arraymeta.io.ms_writer import create_ms
    from arraymeta.sky import str_to_epoch

    _require_file(args.config)
    config = load_config(args.config)
    if config.antenna_file is None:
        raise ValueError("Config 'array' section has no antenna_file")
    _require_file(config.antenna_file)

    print("=" * 60)
    print("arraymeta - MeasurementSet creation")
    print("=" * 60)

    offsets = read_antenna_offsets(config.antenna_file)
    baselines = create_ms(
        args.ms,
        config,
        offsets,
        str_to_epoch(args.start),
        duration=args.duration,
        track_zenith=args.track_zenith,
        overwrite=args.overwrite,
        verbose=args.verbose,
    )
    print(f"Baselines: {len(baselines)}")
    print("=" * 60)


if __name__ == "__main__":
    main()
