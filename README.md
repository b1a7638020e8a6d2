# frakt

Fractal rendering split between a TCP server and workers. The server cuts the
complex plane into tiles and answers a worker's request with a fragment task;
the worker computes a pixel intensity for every point of the tile, colours it,
and sends the intensities back. The server turns them into an image and saves
it as a PNG.

Fractals that can be computed: Julia, Mandelbrot, iterated sin(z),
Newton-Raphson for z³ − 1 and z⁴ − 1, and the Burning Ship.

## Installation

```sh
pip install .
```

Pillow is the only runtime dependency.

## Running

Start the server:

```sh
frakt-server --hostname localhost -P 8787 --width 1200 --height 1200
```

Then start a worker:

```sh
frakt-worker --hostname localhost -P 8787 -N my_worker
```

Worker options:

| Option | Default | Meaning |
| --- | --- | --- |
| `--hostname` | `localhost` | server host |
| `-P`, `--port` | `8787` | server port |
| `-N`, `--name` | `worker` | worker name sent in the request |
| `-v`, `-d`, `-t` | off | info, debug or trace logging |
| `-s`, `--save` | off | save the rendered fragment as `julia-<random>.png` |
| `-o`, `--open` | off | open the saved image in the system viewer (needs `-s`) |

Server options: `--hostname`, `-P/--port`, `-v`, `-d`, `-t`, and
`--width`/`--height` (default 1200), which set the resolution of every task
and the size of the saved image. The server saves each result as
`test-23_02_23-<random>.png`.

With no logging flag only errors are shown; `-v` selects info, `-d` debug,
`-t` trace, and other combinations warnings. Images are written to the
current working directory.

The task the server hands out is always the same: iterated sin(z) with
c = 0.2 + 1i, at most 64 iterations, on the first 2 × 2 tile of the square
from (−3, −3) to (3, 3).

## What it does not do

- The server answers every request with that first tile only; it does not
  hand out the other tiles, and it does not stitch several results into one
  picture. Each result is saved as its own image.
- The server serves one connection at a time.
- There is no window for viewing images; `-o` only starts the system viewer.
- A worker handles one task per run and then exits.

## Wire format

Every message is framed as two big-endian `u32` values, the total size and
the JSON size, followed by the UTF-8 JSON text and any binary payload
(`frakt.protocol.write`, `write_img`, `read_message`). The JSON is a
single-key object such as `{"FragmentRequest": {...}}`. A worker's result
carries, after the JSON, one pair of big-endian `f32` values per pixel: the
final magnitude and the normalised iteration count.

## Library use

```python
from frakt.complex import Complex
from frakt.fractals import MandelbrotDescriptor

intensity = MandelbrotDescriptor().compute_pixel_intensity(Complex(-0.5, 0.0), 100)
print(intensity.count)
```

`frakt.messages` has `FragmentRequest`, `FragmentTask` and `FragmentResult`,
each with `serialize()` and `deserialize()`, and `deserialize_message` for
what the server accepts. `frakt.imaging.generate_fractal_set` renders a
`FragmentTask` into a Pillow image, its RGB bytes and its pixel intensities;
`frakt.colors.color` maps one intensity to an RGB triple.
`frakt.fragment_maker.generate_range` cuts a `Range` into tiles.

## Tests

```sh
pip install .[test]
pytest
```