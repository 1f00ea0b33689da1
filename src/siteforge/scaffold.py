"""Project scaffolding: SiteConfig -> Next.js file manifest written to disk."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .site import SiteConfig
from .utils import json_dumps, slugify

FILE_TYPES = ("component", "page", "layout", "data", "config", "style", "asset", "api")

REQUIRED_FILES = (
    "package.json",
    "src/lib/constants.ts",
    "src/app/layout.tsx",
    "src/app/page.tsx",
)

NEXTJS_DEPENDENCIES = {
    "next": "^15.3.0",
    "react": "^19.0.0",
    "react-dom": "^19.0.0",
    "lucide-react": "^0.460.0",
    "clsx": "^2.1.0",
}

NEXTJS_DEV_DEPENDENCIES = {
    "typescript": "^5.5.0",
    "@types/node": "^20.0.0",
    "@types/react": "^19.0.0",
    "@types/react-dom": "^19.0.0",
    "@tailwindcss/postcss": "^4.0.0",
    "tailwindcss": "^4.0.0",
    "postcss": "^8.0.0",
}


@dataclass(frozen=True)
class GeneratedFile:
    path: str
    content: str
    type: str
    generator: str = "template"

    @property
    def size(self) -> int:
        return len(self.content.encode("utf-8"))

    @property
    def lines(self) -> int:
        return len(self.content.splitlines())


@dataclass
class GenerationResult:
    project_path: str
    files: List[GeneratedFile] = field(default_factory=list)


def _ts_const(name: str, value: object) -> str:
    return f"export const {name} = {json_dumps(value)} as const;\n"


def generate_config_files(site: SiteConfig) -> List[GeneratedFile]:
    package_json = {
        "name": slugify(site.name),
        "version": "1.0.0",
        "private": True,
        "scripts": {"dev": "next dev", "build": "next build", "start": "next start", "lint": "next lint"},
        "dependencies": NEXTJS_DEPENDENCIES,
        "devDependencies": NEXTJS_DEV_DEPENDENCIES,
    }
    tsconfig = {
        "compilerOptions": {
            "target": "ES2017",
            "lib": ["dom", "dom.iterable", "esnext"],
            "strict": True,
            "noEmit": True,
            "module": "esnext",
            "moduleResolution": "bundler",
            "jsx": "preserve",
            "plugins": [{"name": "next"}],
            "paths": {"@/*": ["./src/*"]},
        },
        "include": ["next-env.d.ts", "**/*.ts", "**/*.tsx"],
        "exclude": ["node_modules"],
    }
    next_config = (
        'import type { NextConfig } from "next";\n\n'
        "const nextConfig: NextConfig = {\n"
        '  images: { remotePatterns: [{ protocol: "https", hostname: "**" }] },\n'
        "};\n\n"
        "export default nextConfig;\n"
    )
    postcss = 'const config = { plugins: { "@tailwindcss/postcss": {} } };\n\nexport default config;\n'
    gitignore = "node_modules/\n.next/\nout/\n.env*.local\n"
    return [
        GeneratedFile("package.json", json_dumps(package_json) + "\n", "config"),
        GeneratedFile("tsconfig.json", json_dumps(tsconfig) + "\n", "config"),
        GeneratedFile("next.config.ts", next_config, "config"),
        GeneratedFile("postcss.config.mjs", postcss, "config"),
        GeneratedFile(".gitignore", gitignore, "config"),
    ]


def generate_data_files(site: SiteConfig) -> List[GeneratedFile]:
    data = site.to_dict()
    services = data.pop("services")
    cities = data.pop("cities")
    return [
        GeneratedFile("src/lib/constants.ts", _ts_const("SITE_CONFIG", data), "data"),
        GeneratedFile("src/lib/services.ts", _ts_const("SERVICES", services), "data"),
        GeneratedFile("src/lib/cities.ts", _ts_const("CITIES", cities), "data"),
    ]


def generate_style_files(site: SiteConfig) -> List[GeneratedFile]:
    colors = site.theme.colors
    variables = "\n".join(
        f"  --color-{key.replace('_', '-')}: {value};" for key, value in sorted(colors.items())
    )
    css = f'@import "tailwindcss";\n\n@theme {{\n{variables}\n}}\n'
    return [GeneratedFile("src/app/globals.css", css, "style")]


def generate_component_files(site: SiteConfig) -> List[GeneratedFile]:
    hero = (
        'import { SITE_CONFIG } from "@/lib/constants";\n\n'
        "export function Hero() {\n"
        "  return (\n"
        '    <section className="bg-primary text-white py-20">\n'
        '      <div className="max-w-6xl mx-auto px-4">\n'
        "        <h1>{SITE_CONFIG.heroHeadline}</h1>\n"
        "        <p>{SITE_CONFIG.heroSubheadline}</p>\n"
        '        <a href={SITE_CONFIG.phoneLink} className="bg-accent">Call {SITE_CONFIG.phoneDisplay}</a>\n'
        "      </div>\n"
        "    </section>\n"
        "  );\n"
        "}\n"
    )
    value_props = (
        'import { SITE_CONFIG } from "@/lib/constants";\n\n'
        "export function ValueProps() {\n"
        "  return (\n"
        '    <section className="py-16">\n'
        "      {SITE_CONFIG.valueProps.map((vp) => (\n"
        "        <div key={vp.title}>\n"
        "          <h3>{vp.title}</h3>\n"
        "          <p>{vp.description}</p>\n"
        "        </div>\n"
        "      ))}\n"
        "    </section>\n"
        "  );\n"
        "}\n"
    )
    return [
        GeneratedFile("src/components/Hero.tsx", hero, "component"),
        GeneratedFile("src/components/ValueProps.tsx", value_props, "component"),
    ]


def generate_page_files(site: SiteConfig) -> List[GeneratedFile]:
    layout = (
        'import type { Metadata } from "next";\n'
        'import { SITE_CONFIG } from "@/lib/constants";\n'
        'import "./globals.css";\n\n'
        "export const metadata: Metadata = {\n"
        "  title: { default: SITE_CONFIG.seo.defaultTitle, template: SITE_CONFIG.seo.titleTemplate },\n"
        "  description: SITE_CONFIG.seo.defaultDescription,\n"
        "};\n\n"
        "export default function RootLayout({ children }: { children: React.ReactNode }) {\n"
        '  return (\n    <html lang="en">\n      <body>{children}</body>\n    </html>\n  );\n}\n'
    )
    home = (
        'import { Hero } from "@/components/Hero";\n'
        'import { ValueProps } from "@/components/ValueProps";\n\n'
        "export default function HomePage() {\n"
        "  return (\n    <main>\n      <Hero />\n      <ValueProps />\n    </main>\n  );\n}\n"
    )
    about = (
        'import { SITE_CONFIG } from "@/lib/constants";\n\n'
        "export default function AboutPage() {\n"
        "  return (\n    <main>\n      <h1>About {SITE_CONFIG.name}</h1>\n"
        "      <p>{SITE_CONFIG.aboutText}</p>\n    </main>\n  );\n}\n"
    )
    service_detail = (
        'import { notFound } from "next/navigation";\n'
        'import { SERVICES } from "@/lib/services";\n\n'
        "export function generateStaticParams() {\n"
        "  return SERVICES.map((service) => ({ slug: service.slug }));\n"
        "}\n\n"
        "export default async function ServicePage({ params }: { params: Promise<{ slug: string }> }) {\n"
        "  const { slug } = await params;\n"
        "  const service = SERVICES.find((s) => s.slug === slug);\n"
        "  if (!service) notFound();\n"
        "  return (\n    <main>\n      <h1>{service.title}</h1>\n      <p>{service.description}</p>\n"
        "      <ul>{service.features.map((f) => <li key={f}>{f}</li>)}</ul>\n    </main>\n  );\n}\n"
    )
    location_detail = (
        'import { notFound } from "next/navigation";\n'
        'import { CITIES } from "@/lib/cities";\n\n'
        "export function generateStaticParams() {\n"
        "  return CITIES.map((city) => ({ slug: city.slug }));\n"
        "}\n\n"
        "export default async function LocationPage({ params }: { params: Promise<{ slug: string }> }) {\n"
        "  const { slug } = await params;\n"
        "  const city = CITIES.find((c) => c.slug === slug);\n"
        "  if (!city) notFound();\n"
        "  return (\n    <main>\n      <h1>{city.h1}</h1>\n      <p>{city.metaDescription}</p>\n"
        "    </main>\n  );\n}\n"
    )
    files = [
        GeneratedFile("src/app/layout.tsx", layout, "layout"),
        GeneratedFile("src/app/page.tsx", home, "page"),
        GeneratedFile("src/app/about/page.tsx", about, "page"),
    ]
    if site.services:
        files.append(GeneratedFile("src/app/services/[slug]/page.tsx", service_detail, "page"))
    if site.cities:
        files.append(GeneratedFile("src/app/locations/[slug]/page.tsx", location_detail, "page"))
    return files


def generate_project_files(site: SiteConfig) -> List[GeneratedFile]:
    files: List[GeneratedFile] = []
    files.extend(generate_config_files(site))
    files.extend(generate_data_files(site))
    files.extend(generate_style_files(site))
    files.extend(generate_component_files(site))
    files.extend(generate_page_files(site))
    return files


def generate_project(site: SiteConfig, output_dir: str) -> GenerationResult:
    """Generates all files and writes them under ``output_dir``."""
    files = generate_project_files(site)
    root = Path(output_dir)
    for generated in files:
        path = root / generated.path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(generated.content, encoding="utf-8")
    return GenerationResult(project_path=str(root), files=files)
