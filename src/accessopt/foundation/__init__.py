"""Cross-cutting helpers: errors, logging, configuration defaults, registries."""
