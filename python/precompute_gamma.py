#!/usr/bin/env python3
"""Generate the gamma correction table compiled into the light firmware.

The output is meant to be copied by hand into the firmware header that
declares ``gamma8``.
"""
import argparse
import math
import sys

import matplotlib.pyplot as plt

from c_source import c_identifier, write_lines

# === CONFIG ===
GAMMA = 2.8       # correction factor
MAX_IN = 255      # top end of input range
MAX_OUT = 255     # top end of output range
OUT_FILE = "gamma.h"
VARNAME = "gamma8"
PER_LINE = 16
FIELD_WIDTH = 4


def generate_gamma_lut(gamma=GAMMA, max_in=MAX_IN, max_out=MAX_OUT):
    return [
        math.floor((i / max_in) ** gamma * max_out + 0.5)
        for i in range(max_in + 1)
    ]


def gamma_table_lines(lut, gamma, varname=VARNAME, per_line=PER_LINE):
    """Render lut as a commented C array declaration.

    Values are right-justified to FIELD_WIDTH columns and broken into rows of
    per_line entries; the last row closes the initializer.
    """
    c_identifier(varname)
    top = max(lut)
    if top > 255:
        ctype = "uint16_t"
        wording = f"{top + 1}-level output"
    else:
        ctype = "uint8_t"
        wording = "8-bit colours"

    lines = [
        "// This table remaps linear input values to nonlinear gamma-corrected output",
        f"// values. The output values are specified for {wording} with a gamma",
        f"// correction factor of {gamma:g}",
        f"const static {ctype} PROGMEM {varname}[{len(lut)}] = {{",
    ]
    rows = [lut[i:i + per_line] for i in range(0, len(lut), per_line)]
    for n, row in enumerate(rows):
        line = ",".join(str(v).rjust(FIELD_WIDTH) for v in row)
        if n < len(rows) - 1:
            lines.append(line + ",")
        else:
            lines.append(line + " };")
    return lines


def write_gamma_table(path=OUT_FILE, gamma=GAMMA, max_in=MAX_IN,
                      max_out=MAX_OUT, varname=VARNAME):
    lut = generate_gamma_lut(gamma, max_in, max_out)
    write_lines(path, gamma_table_lines(lut, gamma, varname))
    return lut


def plot_lut(lut, gamma, path=None):
    fig, ax = plt.subplots()
    ax.plot(range(len(lut)), lut, label=f"gamma={gamma:g}")
    ax.set_xlabel("Input")
    ax.set_ylabel("Output")
    ax.set_title("Gamma Correction LUT")
    ax.grid(True)
    ax.legend()
    fig.tight_layout()
    if path is None:
        plt.show()
    else:
        fig.savefig(path)
    plt.close(fig)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Firmware gamma table generator")
    parser.add_argument("-g", "--gamma", type=float, default=GAMMA,
                        help=f"gamma correction factor (default {GAMMA})")
    parser.add_argument("--max-in", type=int, default=MAX_IN,
                        help=f"top end of the input range (default {MAX_IN})")
    parser.add_argument("--max-out", type=int, default=MAX_OUT,
                        help=f"top end of the output range (default {MAX_OUT})")
    parser.add_argument("-n", "--name", default=VARNAME,
                        help=f"C array name (default {VARNAME})")
    parser.add_argument("-o", "--output", default=OUT_FILE,
                        help=f"header to write (default {OUT_FILE})")
    parser.add_argument("--plot", action="store_true",
                        help="show the response curve")
    parser.add_argument("--plot-file",
                        help="save the response curve to this image file")
    args = parser.parse_args(argv)

    try:
        lut = write_gamma_table(args.output, args.gamma, args.max_in,
                                args.max_out, args.name)
    except ValueError as e:
        print(f"Invalid argument: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"Failed to write {args.output}: {e}", file=sys.stderr)
        return 1

    print(f"Gamma table ({len(lut)} entries, gamma={args.gamma:g}) written to {args.output}")

    if args.plot_file:
        plot_lut(lut, args.gamma, args.plot_file)
    if args.plot:
        plot_lut(lut, args.gamma)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
