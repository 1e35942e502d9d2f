"""chefctl -- run configuration, JSON attribute merging and client bootstrap for Chef.

This package holds the configuration surface of a Chef client wrapper. It
does not supervise the client process itself; instead it resolves every
setting a supervisor needs, runs the lifecycle hooks that shape the client
command line, and computes the client's own bootstrap settings.

Typical workflow::

    chefctl config init            # write a commented default config document
    chefctl prepare                # run pre-run hooks, print the client command
    chefctl client-config          # render client.rb for the configured repo

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: Locating, loading and writing the run configuration document.
    platform_defaults: Windows-like vs POSIX default paths.
    merge: Recursive deep merge of JSON documents.
    invocation: Builder for the client command line and environment.
    runner: Pre-run / post-run lifecycle driver.
    client_config: Cookbook path resolution and ``client.rb`` rendering.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
