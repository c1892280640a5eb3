"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult


class Visualizer:
    """
    Chart generator for strategy benchmark results.
    
    Creates charts comparing strategies by time and accuracy.
    """
    
    # Color palette for strategies
    COLORS = {
        "Backtracking": "#2ecc71",            # Green
        "Constraint Propagation": "#f39c12",  # Orange
        "Rule-Based": "#3498db",              # Blue
        "Simulated Annealing": "#e74c3c",     # Red
    }
    
    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.
        
        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)
        
        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")
    
    @property
    def algorithms(self) -> List[str]:
        return sorted(set(r.algorithm for r in self.results))
    
    def generate_all(self) -> List[str]:
        """
        Generate all charts.
        
        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_time_comparison(),
            self.plot_accuracy_comparison(),
            self.plot_time_distribution(),
        ]
    
    def _save(self, name: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, name)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        return path
    
    def plot_time_comparison(self) -> str:
        """Create bar chart comparing average solve times in milliseconds."""
        fig, ax = plt.subplots(figsize=(10, 6))
        
        algorithms = self.algorithms
        avg_times = [
            np.mean([r.time_seconds for r in self.results if r.algorithm == algo]) * 1000
            for algo in algorithms
        ]
        colors = [self.COLORS.get(algo, "#95a5a6") for algo in algorithms]
        
        bars = ax.bar(algorithms, avg_times, color=colors, edgecolor='black', linewidth=0.5)
        
        for bar, time in zip(bars, avg_times):
            ax.annotate(f'{time:.2f} ms',
                       xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                       xytext=(0, 3),
                       textcoords="offset points",
                       ha='center', va='bottom', fontsize=10)
        
        ax.set_xlabel('Strategy', fontsize=12)
        ax.set_ylabel('Average Time (ms)', fontsize=12)
        ax.set_title('Average Solve Time by Strategy', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)
        
        return self._save("time_comparison.png")
    
    def plot_accuracy_comparison(self) -> str:
        """Create bar chart of the share of puzzles each strategy got right."""
        fig, ax = plt.subplots(figsize=(10, 6))
        
        algorithms = self.algorithms
        accuracies = []
        for algo in algorithms:
            algo_results = [r for r in self.results if r.algorithm == algo]
            correct = sum(1 for r in algo_results if r.correct)
            accuracies.append(correct / len(algo_results) * 100)
        colors = [self.COLORS.get(algo, "#95a5a6") for algo in algorithms]
        
        bars = ax.bar(algorithms, accuracies, color=colors, edgecolor='black', linewidth=0.5)
        
        for bar, acc in zip(bars, accuracies):
            ax.annotate(f'{acc:.0f}%',
                       xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                       xytext=(0, 3),
                       textcoords="offset points",
                       ha='center', va='bottom', fontsize=10)
        
        ax.set_xlabel('Strategy', fontsize=12)
        ax.set_ylabel('Correct (%)', fontsize=12)
        ax.set_title('Solve Accuracy by Strategy', fontsize=14, fontweight='bold')
        ax.set_ylim(0, 115)
        ax.axhline(y=100, color='gray', linestyle='--', alpha=0.3)
        
        return self._save("accuracy_comparison.png")
    
    def plot_time_distribution(self) -> str:
        """Create box plot showing time distribution."""
        fig, ax = plt.subplots(figsize=(12, 6))
        
        algorithms = self.algorithms
        data = [
            [r.time_seconds * 1000 for r in self.results if r.algorithm == algo]
            for algo in algorithms
        ]
        
        bp = ax.boxplot(data, patch_artist=True)
        ax.set_xticks(range(1, len(algorithms) + 1))
        ax.set_xticklabels(algorithms)
        
        for patch, algo in zip(bp['boxes'], algorithms):
            patch.set_facecolor(self.COLORS.get(algo, "#95a5a6"))
            patch.set_alpha(0.7)
        
        ax.set_xlabel('Strategy', fontsize=12)
        ax.set_ylabel('Time (ms)', fontsize=12)
        ax.set_title('Solve Time Distribution by Strategy', fontsize=14, fontweight='bold')
        
        return self._save("time_distribution.png")
    
    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        lines = [
            "# Benchmark Summary\n",
            "| Strategy | Accuracy | Avg Time | Avg Memory | Avg Iterations |",
            "|----------|----------|----------|------------|----------------|"
        ]
        
        for algo in self.algorithms:
            algo_results = [r for r in self.results if r.algorithm == algo]
            
            correct = sum(1 for r in algo_results if r.correct)
            accuracy = (correct / len(algo_results)) * 100
            
            avg_time = np.mean([r.time_seconds for r in algo_results])
            avg_memory = np.mean([r.memory_bytes / (1024 * 1024) for r in algo_results])
            avg_iters = np.mean([r.iterations for r in algo_results])
            
            lines.append(
                f"| {algo} | {accuracy:.1f}% | {avg_time:.4f}s | {avg_memory:.2f} MB | {int(avg_iters):,} |"
            )
        
        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write("\n".join(lines))
        
        return path
