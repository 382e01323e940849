from dataclasses import replace

from domain.errors import AllProvidersFailedError
from domain.fallback import generate_fallback_description
from domain.models import GeneratedContent, PromptContext, Ticket
from domain.prompt import build_prompt, build_summary_prompt
from domain.response import parse_response_content, parse_summary_response

from application.pr_description.contracts import (
    PRDescriptionConfig,
    PRDescriptionDependencies,
    PRDescriptionResult,
    RepositorySnapshot,
)


def load_ticket(
    config: PRDescriptionConfig,
    dependencies: PRDescriptionDependencies,
) -> Ticket:
    # Busca o ticket no issue tracker; o valor fica imutavel durante a execucao.
    return dependencies.get_ticket(config.ticket_key)


def collect_changes(
    config: PRDescriptionConfig,
    dependencies: PRDescriptionDependencies,
) -> RepositorySnapshot:
    # Le diff, numstat e commits da branch atual contra a base.
    snapshot = dependencies.collect_changes(config.base_branch, config.repository_directory)
    if snapshot.change_set.total_files == 0:
        raise RuntimeError(
            f"No changes detected between '{config.base_branch}' and '{snapshot.branch}'"
        )
    return snapshot


def build_prompt_context(
    config: PRDescriptionConfig,
    dependencies: PRDescriptionDependencies,
    ticket: Ticket,
    snapshot: RepositorySnapshot,
) -> PromptContext:
    # Template e opcional: ausencia nao e erro.
    template = dependencies.load_template(config.repository_directory)
    return PromptContext(
        ticket=ticket,
        change_set=snapshot.change_set,
        diff_text=snapshot.diff_text or None,
        template=template,
        repo_link=snapshot.repo_link,
        pr_title=config.pr_title,
    )


def generate_summary(
    config: PRDescriptionConfig,
    dependencies: PRDescriptionDependencies,
    context: PromptContext,
) -> str:
    # Primeira passada: resumo estruturado usado como contexto da segunda.
    result = dependencies.provider_manager.generate_content(
        build_summary_prompt(context),
        config.explicit_provider,
    )
    return parse_summary_response(result.content)


def generate_description(
    config: PRDescriptionConfig,
    dependencies: PRDescriptionDependencies,
    context: PromptContext,
    summary: str,
) -> GeneratedContent:
    # Segunda passada: titulo/corpo finais; o resumo da primeira passada prevalece.
    result = dependencies.provider_manager.generate_content(
        build_prompt(context, summary or None),
        config.explicit_provider,
    )
    content = parse_response_content(result.content)
    return replace(
        content,
        title=config.pr_title or content.title,
        summary=summary or content.summary,
        source=result.provider_id.value,
    )


def generate_offline_description(
    config: PRDescriptionConfig,
    dependencies: PRDescriptionDependencies,
    context: PromptContext,
    error: AllProvidersFailedError,
) -> GeneratedContent:
    # Todos os providers falharam: descricao deterministica, sem abortar o comando.
    dependencies.observe_provider_failures(error)
    return generate_fallback_description(context, ticket_base_url=config.ticket_base_url)


def build_dry_run_result(content: GeneratedContent) -> PRDescriptionResult:
    return PRDescriptionResult(
        status="dry_run",
        message="Dry run completed; pull request was not created",
        title=content.title,
        body=content.body,
        summary=content.summary,
        source=content.source,
    )


def publish_pull_request(
    config: PRDescriptionConfig,
    dependencies: PRDescriptionDependencies,
    snapshot: RepositorySnapshot,
    content: GeneratedContent,
) -> PRDescriptionResult:
    pull_request = dependencies.create_pr(
        head=snapshot.branch,
        base=config.base_branch,
        title=content.title,
        body=content.body,
    )
    return PRDescriptionResult(
        status="success",
        message="PR created successfully",
        title=content.title,
        body=content.body,
        summary=content.summary,
        source=content.source,
        pr_url=pull_request["html_url"],
    )
