"""rootx-gen: Go data-access code generator driven by SQL file directives."""
