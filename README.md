# sastexport

Building blocks for exporting triaged results from a SAST server so they can
be imported into another analysis platform. The package holds the parts of
an export that work on data already fetched from the server. Anything that
talks to the server is passed in by you.

## What is in it

- **Query identifiers**
  - `sastexport.queryid.get_ast_query_id(language, name, group)` derives the
    target platform's query ID. It is the 64-bit FNV-1 hash of
    `queries/<language>/<group>/<name>/<name>.cs`, returned as a decimal
    string.
  - `sastexport.querymapping.QueryMappingProvider(path, client=None)` loads
    `{"mappings": [{"astId": ..., "sastId": ...}]}` from a local file or a
    URL. For a URL it uses `client.get(url)`, or `urllib` when no client is
    given. `add_query_mapping` adds a derived ID for a SAST query that has
    no mapping yet.
  - `sastexport.astquery.ASTQueryProvider` returns the mapped ID for a
    query, or the derived one when there is none.
    `get_custom_queries_list()` keeps only the query groups whose package
    type is not `"Cx"`.
- **Team flattening**
  - `sastexport.transform` turns nested teams into flat root teams, so that
    `/TeamA/TeamB` becomes `/TeamA_TeamB` (`transform_teams`).
  - `transform_users` adds to each user every descendant of the teams the
    user belongs to. Pass it the unflattened team list.
  - `transform_saml_team_mappings` and `transform_scan_report` rewrite team
    paths to the flat names.
  - With `TransformOptions(nested_teams=True)` every transform returns its
    input unchanged.
  - `transform_xml_installation_mappings` and `transform_engine_servers`
    reduce installation settings and engine servers to
    `InstallationMapping` entries.
- **Scan reports and metadata**
  - `sastexport.report.parse_report` reads a `CxXMLResults` scan report. It
    raises `ValueError` for XML that is invalid or has the wrong root
    element.
  - `sastexport.metadata.get_queries_from_report` keeps the results that
    have a remark, with one `Result` per path.
  - `sastexport.metadata.MetadataFactory.get_metadata_record` works through
    the providers you supply. It downloads the source files it needs and
    computes similarity IDs in a thread pool, using up to
    `sastexport.worker.get_num_cpu()` workers. It returns a `Record`.
  - `sastexport.resultsmapping.generate_csv` turns records into rows.
    `write_all_to_sanitized_csv` encodes them with every cell quoted and
    prefixed with `'`, so that spreadsheets do not evaluate them as
    formulas.
- **Working directory**
  - `sastexport.export.create_export`, `create_export_local` and
    `create_export_from_local` give an `Export` that collects files in a
    directory.
  - `add_file`, `add_file_with_data_source`, `json_data_source`,
    `create_dir` and `clean` manage its contents. Used as a context
    manager, an `Export` removes its directory on exit.
  - `create_export_file_name` builds names of the form
    `prefix-YYYY-MM-DD-HH-MM-SS[-suffix].ext`.
  - `sastexport.encryption.create_symmetric_key` returns random key bytes.
- **Permissions**
  - `sastexport.permissions.get_from_export_options` lists the permissions
    that a set of export options needs. The options are listed by
    `sastexport.options.get_options()`.
  - `get_from_jwt_claims` reads the permissions held under given claim
    keys.
  - `get_missing` reports the required permissions that are not held, and
    `get_description` gives each permission a readable name.
- **Logging**
  - `sastexport.logsetup.init_logging(level, stream)` writes JSON log
    events to the stream. The level is one of `trace`, `debug`, `info`,
    `warn`, `error`, `fatal`, `panic`, `disabled` or the empty string.
  - `MultiLevelWriter` sends every event to a file writer. An event also
    goes to a console writer when it is at or above a minimum level, or
    when verbose output is on.
  - `ConsoleWriter` renders events as plain lines, and
    `console_time_formatter` shows timestamps as `HH:MM:SS`.

## Example

```python
from sastexport.queryid import get_ast_query_id
from sastexport.transform import Team, TransformOptions, transform_teams
from sastexport.permissions import get_from_export_options, get_missing

query_id = get_ast_query_id("Go", "Find_Command_Injection_Sanitize", "General")
# "9498204717545098527"

teams = transform_teams(
    [
        Team(id=1, name="TeamA", full_name="/TeamA", parent_id=0),
        Team(id=2, name="TeamB", full_name="/TeamA/TeamB", parent_id=1),
    ],
    TransformOptions(),
)
# teams[1].full_name == "/TeamA_TeamB"

required = get_from_export_options(["users", "triage"])
missing = get_missing(required, ["use-odata"])
```

The collaborators you supply are described as protocols in
`sastexport.interfaces`: `ASTQueryIDProvider`, `QueriesRepo`,
`QueryMappingRepo`, `MethodLineRepo`, `SourceFileRepo`, `PresetRepo`,
`InstallationRepo` and `SimilarityIDProvider`. Any object with those
methods will do. `sastexport.preset.PresetProvider` passes preset lookups
through to a `PresetRepo`.

## What it does not do

- There is no command-line program.
- There is no client for the SAST server's REST, SOAP or OData interfaces.
  Those are the repositories you pass in.
- No similarity ID algorithm is included. It comes from your
  `SimilarityIDProvider`.
- `Export` collects files but does not compress or encrypt them into an
  archive. `create_symmetric_key` only produces the key.

The package depends only on the Python standard library and supports
Python 3.10 and later.