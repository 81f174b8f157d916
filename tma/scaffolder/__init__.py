"""tma scaffolder -- generates Tuist projects and feature/core modules.

Quick usage::

    from tma.config import Config
    from tma.models import ModuleKind, ModuleSpec
    from tma.scaffolder import ModuleGenerator, ProjectGenerator

    config = Config(project_root=Path("/work"))
    generator = ProjectGenerator(config)
    project_path = generator.generate(generator.spec_for("MyApp"))

    module_gen = ModuleGenerator(Config(project_root=project_path))
    report = module_gen.generate(ModuleSpec(name="Profile", kind=ModuleKind.FEATURE))
"""

from tma.scaffolder.module_generator import ModuleGenerator, ModuleReport, ModuleStage
from tma.scaffolder.project_generator import ProjectGenerator
from tma.scaffolder.templates import TemplateRenderer

__all__ = [
    "ModuleGenerator",
    "ModuleReport",
    "ModuleStage",
    "ProjectGenerator",
    "TemplateRenderer",
]
