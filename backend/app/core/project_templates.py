"""
Starter file sets for new projects.

A project created with a known template name is seeded with these files.
Unknown template names seed nothing.
"""

import json
from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class TemplateFile:
    path: str
    name: str
    type: str
    content: str


_REACT_APP = """import React from 'react';

function App() {
  return (
    <div className="min-h-screen bg-gray-100 flex items-center justify-center">
      <div className="bg-white p-8 rounded-lg shadow-md max-w-md mx-auto">
        <h1 className="text-3xl font-bold text-gray-800 mb-4">
          Welcome to your AI-generated app!
        </h1>
        <p className="text-gray-600 mb-4">
          This is your starting point. Ask the AI to modify or add features!
        </p>
        <div className="bg-blue-50 p-4 rounded-lg border border-blue-200">
          <p className="text-blue-700 text-sm">
            Try asking the AI: "Add a button that changes the background color"
          </p>
        </div>
      </div>
    </div>
  );
}

export default App;"""

_REACT_PACKAGE_JSON = json.dumps(
    {
        "name": "ai-generated-app",
        "version": "1.0.0",
        "private": True,
        "dependencies": {
            "react": "^18.2.0",
            "react-dom": "^18.2.0",
            "@types/react": "^18.2.0",
            "@types/react-dom": "^18.2.0",
            "typescript": "^5.0.0",
            "tailwindcss": "^3.3.0",
        },
        "scripts": {
            "start": "react-scripts start",
            "build": "react-scripts build",
            "test": "react-scripts test",
            "eject": "react-scripts eject",
        },
        "eslintConfig": {"extends": ["react-app", "react-app/jest"]},
        "browserslist": {
            "production": [">0.2%", "not dead", "not op_mini all"],
            "development": [
                "last 1 chrome version",
                "last 1 firefox version",
                "last 1 safari version",
            ],
        },
    },
    indent=2,
)

_REACT_INDEX = """import React from 'react';
import ReactDOM from 'react-dom/client';
import './index.css';
import App from './App';

const root = ReactDOM.createRoot(
  document.getElementById('root') as HTMLElement
);
root.render(
  <React.StrictMode>
    <App />
  </React.StrictMode>
);"""

_REACT_CSS = """@tailwind base;
@tailwind components;
@tailwind utilities;

body {
  margin: 0;
  font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', 'Roboto', 'Oxygen',
    'Ubuntu', 'Cantarell', 'Fira Sans', 'Droid Sans', 'Helvetica Neue',
    sans-serif;
  -webkit-font-smoothing: antialiased;
  -moz-osx-font-smoothing: grayscale;
}

code {
  font-family: source-code-pro, Menlo, Monaco, Consolas, 'Courier New',
    monospace;
}"""

_DASHBOARD_APP = """import React, { useState } from 'react';

interface DashboardCard {
  id: number;
  title: string;
  value: string;
  change: string;
  positive: boolean;
}

function App() {
  const [cards] = useState<DashboardCard[]>([
    { id: 1, title: 'Total Users', value: '12,543', change: '+12%', positive: true },
    { id: 2, title: 'Revenue', value: '$45,231', change: '+8%', positive: true },
    { id: 3, title: 'Orders', value: '1,234', change: '-3%', positive: false },
    { id: 4, title: 'Growth', value: '23%', change: '+5%', positive: true },
    { id: 5, title: 'Conversion', value: '3.4%', change: '+0.2%', positive: true },
    { id: 6, title: 'Bounce Rate', value: '42%', change: '-1%', positive: true }
  ]);

  return (
    <div className="min-h-screen bg-gray-50">
      <div className="bg-white shadow">
        <div className="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8">
          <div className="flex justify-between items-center py-6">
            <h1 className="text-3xl font-bold text-gray-900">Dashboard</h1>
            <button className="bg-blue-600 hover:bg-blue-700 text-white px-6 py-2 rounded-lg font-medium transition-colors">
              New Item
            </button>
          </div>
        </div>
      </div>

      <main className="max-w-7xl mx-auto py-8 px-4 sm:px-6 lg:px-8">
        <div className="grid grid-cols-1 md:grid-cols-2 lg:grid-cols-3 gap-6 mb-8">
          {cards.map(card => (
            <div key={card.id} className="bg-white rounded-lg shadow hover:shadow-md transition-shadow p-6">
              <div className="flex items-center justify-between">
                <div>
                  <p className="text-sm font-medium text-gray-600 mb-1">{card.title}</p>
                  <p className="text-2xl font-bold text-gray-900">{card.value}</p>
                </div>
                <div className={`text-sm font-medium ${card.positive ? 'text-green-600' : 'text-red-600'}`}>
                  {card.change}
                </div>
              </div>
            </div>
          ))}
        </div>

        <div className="bg-white rounded-lg shadow p-6">
          <h2 className="text-xl font-bold text-gray-900 mb-4">Recent Activity</h2>
          <p className="text-gray-600">
            This is your dashboard template. Ask the AI to customize it with charts, tables, or any other features you need!
          </p>
        </div>
      </main>
    </div>
  );
}

export default App;"""


TEMPLATES: Dict[str, List[TemplateFile]] = {
    "react-basic": [
        TemplateFile("src/App.tsx", "App.tsx", "typescript", _REACT_APP),
        TemplateFile("package.json", "package.json", "json", _REACT_PACKAGE_JSON),
        TemplateFile("src/index.tsx", "index.tsx", "typescript", _REACT_INDEX),
        TemplateFile("src/index.css", "index.css", "css", _REACT_CSS),
    ],
    "dashboard": [
        TemplateFile("src/App.tsx", "App.tsx", "typescript", _DASHBOARD_APP),
    ],
}


def get_template_files(template: str) -> List[TemplateFile]:
    return list(TEMPLATES.get(template, []))
