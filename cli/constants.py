"""Console constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = [
    "write",
    "write-multi",
    "write-file",
    "write-file-multi",
    "get",
    "save",
    "meta",
    "delete",
    "list",
    "buckets",
    "clear",
    "exit",
    "help",
]

STYLE = Style.from_dict(
    {
        "prompt": "#2E9AFE bold",
        "command": "#0088ff bold",
    }
)

GREEN = "\033[32m"
RESET = "\033[0m"

AUTO_ID = "-"

WELCOME_TITLE = "META Storage console"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "meta-storage> "

HELP_TEXT = """Available commands:
  write <bucket> <id|-> <mime-type> <content>        Write object from inline content
  write-multi <bucket> <name>=<mime-type>:<content>  Write several objects (server assigns ids)
  write-file <bucket> <id|-> <path> [mime-type]      Write object from a local file
  write-file-multi <bucket> <path>[=<mime-type>] ... Write several files (server assigns ids)
  get <bucket> <id> [--with-type] [--etag <etag>]    Show object content
  save <bucket> <id> <path>                          Download object to a local file
  meta <bucket> <id>                                 Show object metadata
  delete <bucket> <id>                               Delete object
  list <bucket>                                      List objects in bucket
  buckets                                            List buckets
  clear                                              Clear screen
  help                                               Show this help
  exit                                               Exit console

Use '-' as object id to let the server assign one.
Examples:
  write docs readme text/plain "hello world"
  write-multi docs a=text/plain:one b=text/plain:two
  write-file images - photo.jpg
  get docs readme --with-type
  save docs readme readme.txt"""
