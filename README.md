# bsf

`bsf` is a set of tools around Nix-managed application dependencies: it
inspects in-toto attestation files, sets up direnv for a project, renders
Dockerfiles that build an artifact with Nix, and orders package versions.

## Installation

```
pip install .
```

Python 3.11 or later is required. There are no third-party runtime
dependencies.

## Command line

```
bsf --help
```

Subcommands:

- `bsf att ls <file.intoto.jsonl>` checks that every line of the file is JSON
  and a valid in-toto statement, then prints a table of predicate types and
  subject names.
- `bsf att cat <file.intoto.jsonl> --predicate-type <type> [--subject NAME] [--predicate] [--output FILE]`
  prints the matching statements as indented JSON, or only their predicates
  with `--predicate`. Accepted types are `provenance`, `vulnerability`, `vsa`,
  `test-result`, `spdx`, `scai`, `runtime-trace`, `release`, `link` and `cdx`.
- `bsf direnv [--env KEY=value,OTHER=value]` makes sure `.envrc` contains
  `use flake bsf/.`, makes sure `.gitignore` lists `.envrc`, and with `--env`
  appends an `export` line after checking the pairs.
- `bsf configure` creates `~/.bsf.json` with the default API settings when it
  does not exist. It is only offered when `BSF_DEBUG_MODE=true`.

`BSF_DEBUG_DIR` makes the command run as if started from that directory.
With `BSF_DEBUG=true`, unexpected errors show a full traceback instead of a
one-line message.

## Library

- `bsf.attestation`: `validate_in_toto_statement` groups the statements of a
  JSON Lines document by short predicate name, raising `AttestationError` on
  invalid input; `get_relevant_statements` filters them by predicate type and
  subject.
- `bsf.dockerfile`: `generate_dockerfile` writes a Dockerfile for an
  artifact's command, entrypoint and environment on `linux/amd64` or
  `linux/arm64`; `edit_dockerfile` and `modify_dockerfile` retag the `FROM`
  line marked `bsfimage:dev` or `bsfimage:runtime`.
- `bsf.oci`: `get_new_name`, `gen_oci_attr_name` and
  `modify_dockerfile_with_tag`.
- `bsf.docker_context`: `get_current_context` and `read_context_endpoints`
  read the docker client's settings under `~/.docker`.
- `bsf.packages`: `Package` and `sort_packages`, which puts semantic versions
  first (highest first) and the rest after them (newest first).
- `bsf.precheck`: `is_valid_semver`, `compare_semver` and
  `check_version_greater` for `v`-prefixed versions.
- `bsf.gitutil`: `ignore` adds a path to `.gitignore` once; `get_leaf_dir`.
- `bsf.config`: `Config`, `parse_config` and `pre_check_conf`.
- `bsf.direnv`: `generate_envrc`, `fetch_gitignore`, `set_direnv` and
  `validate_env_vars`.
- `bsf.crypto`: `file_sha256` and `hex_to_base64`.
- `bsf.rust`: `gen_cargo_nix` runs cargo2nix through `nix run` in a directory.
- `bsf.styles`: `Style` and the colour styles used for output.

## What it does not do

This package does not initialise projects, resolve packages against a search
service, generate flake or lock files from `bsf.hcl`, compute hashes for Go
modules, build or push OCI images, or create releases. Its command line covers
only attestations, direnv and configuration.

## Running the tests

```
pip install ".[test]"
pytest
```