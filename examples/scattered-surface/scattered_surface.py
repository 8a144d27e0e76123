import time
import numpy as np


def sampleSurface(num_samples, seed=0):
    """
    Sample f(x, y) = (sin(pi x) cos(pi y), x y) at scattered points
    """
    rng = np.random.default_rng(seed)
    points = rng.uniform(0, 1, size=(num_samples, 2))
    values = np.stack(
        [
            np.sin(np.pi * points[:, 0]) * np.cos(np.pi * points[:, 1]),
            points[:, 0] * points[:, 1],
        ],
        axis=1,
    )
    return points, values


if __name__ == "__main__":

    import jax
    import jax.numpy as jnp
    import nonlinear_rbf

    jax.config.update('jax_default_device', jax.devices('cpu')[0])  # Change to 'gpu' or 'tpu' for accelerators

    num_samples = 60
    points, values = sampleSurface(num_samples)

    print("building the interpolant... ", end="")
    start = time.time()
    config = nonlinear_rbf.BuildConfig(verbose=False)
    interp = nonlinear_rbf.build("r3_vector", list(points), values, config=config)
    print("took {:3.3f} sec".format(time.time() - start))

    # check the interpolant on a grid inside the convex hull of the samples
    x = np.linspace(0.1, 0.9, num=21)
    X, Y = np.meshgrid(x, x, indexing="xy")
    queries = np.stack([X.flatten(), Y.flatten()], axis=1)
    exact = np.stack(
        [
            np.sin(np.pi * queries[:, 0]) * np.cos(np.pi * queries[:, 1]),
            queries[:, 0] * queries[:, 1],
        ],
        axis=1,
    )

    print("evaluating on the grid... ", end="")
    start = time.time()
    pred = nonlinear_rbf.evaluate_many(interp, list(queries))
    print("took {:3.3f} sec".format(time.time() - start))

    error = np.abs(np.asarray(pred) - exact)
    print("max abs error per component: {}".format(error.max(axis=0)))
    print("affine offset: {}".format(np.asarray(interp.offset)))

    # gradient of the first component at the centre of the domain
    grad = jax.grad(lambda p: interp(p)[0])(jnp.array([0.5, 0.5]))
    print("d f0 / d(x, y) at (0.5, 0.5): {}".format(np.asarray(grad)))
