from domain.errors import AllProvidersFailedError

from application.pr_description.contracts import (
    PRDescriptionConfig,
    PRDescriptionDependencies,
    PRDescriptionResult,
)
from application.pr_description.steps import (
    build_dry_run_result,
    build_prompt_context,
    collect_changes,
    generate_description,
    generate_offline_description,
    generate_summary,
    load_ticket,
    publish_pull_request,
)


def run_pr_description_flow(
    config: PRDescriptionConfig,
    dependencies: PRDescriptionDependencies,
    *,
    raise_on_error: bool = True,
) -> PRDescriptionResult:
    try:
        dependencies.observe_step("load_ticket", "start")
        ticket = load_ticket(config, dependencies)
        dependencies.observe_step("load_ticket", "success", detail=ticket.key)

        dependencies.observe_step("collect_changes", "start")
        snapshot = collect_changes(config, dependencies)
        dependencies.observe_step(
            "collect_changes",
            "success",
            detail=f"files_count={snapshot.change_set.total_files}",
        )

        dependencies.observe_step("load_template", "start")
        context = build_prompt_context(config, dependencies, ticket, snapshot)
        dependencies.observe_step(
            "load_template",
            "success",
            detail=context.template.name if context.template else "none",
        )

        try:
            dependencies.observe_step("generate_summary", "start")
            summary = generate_summary(config, dependencies, context)
            dependencies.observe_step("generate_summary", "success")

            dependencies.observe_step("generate_description", "start")
            content = generate_description(config, dependencies, context, summary)
            dependencies.observe_step("generate_description", "success", detail=content.source)
        except AllProvidersFailedError as error:
            dependencies.observe_step("fallback_template", "start", detail=str(error))
            content = generate_offline_description(config, dependencies, context, error)
            dependencies.observe_step("fallback_template", "success")

        dependencies.observe_content(content)

        if config.dry_run:
            dependencies.observe_step("publish", "success", detail="skipped (dry_run=true)")
            return build_dry_run_result(content)

        dependencies.observe_step("publish", "start")
        result = publish_pull_request(config, dependencies, snapshot, content)
        dependencies.observe_step("publish", "success", detail=result.pr_url)
        return result
    except Exception as error:
        dependencies.observe_step("finalize", "error", detail=str(error))
        if raise_on_error:
            raise
        return PRDescriptionResult(
            status="error",
            message="PR description flow failed",
            error=str(error),
        )
