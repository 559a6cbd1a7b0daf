"""Email-to-bug bridge: files inbound bug report emails as Azure DevOps work items."""
